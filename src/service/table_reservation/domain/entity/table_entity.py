import attrs

from src.platform.exception.exceptions import DomainError


def _positive(instance: 'Table', attribute: attrs.Attribute, value: int) -> None:
    if value <= 0:
        raise DomainError(f'Table capacity must be positive, got {value}')


@attrs.frozen
class Table:
    """Physical dining table; immutable once seeded"""

    id: int
    name: str
    capacity: int = attrs.field(validator=_positive)

    def can_seat(self, party_size: int) -> bool:
        return self.capacity >= party_size


# Catalog inserted on first seed
DEFAULT_TABLE_CATALOG: tuple[tuple[str, int], ...] = (
    ('Table 1', 2),
    ('Table 2', 4),
    ('Table 3', 4),
    ('Table 4', 6),
    ('Table 5', 8),
)
