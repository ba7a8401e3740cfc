from datetime import datetime, timezone

import attrs
from uuid_utils import UUID, uuid7

from src.platform.exception.exceptions import DomainError
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.reservation_errors import InvalidPartySizeError
from src.service.table_reservation.domain.value_object.slot import Slot


@attrs.frozen
class Reservation:
    """
    Committed assignment of one table to one party for one slot.

    Created only by allocation and removed only by cancellation.
    table_name is copied from the table at creation; tables never change after seeding.
    """

    id: UUID
    owner_id: int
    customer_name: str
    slot: Slot
    party_size: int
    table_id: int
    table_name: str
    created_at: datetime

    @classmethod
    def create(
        cls,
        *,
        owner_id: int,
        customer_name: str,
        slot: Slot,
        party_size: int,
        table: Table,
    ) -> 'Reservation':
        validate_party_size(party_size)

        if not table.can_seat(party_size):
            # Allocation only offers suitable tables; reaching here is a programming error
            raise DomainError(
                f'{table.name} (capacity {table.capacity}) cannot seat a party of {party_size}',
                500,
            )

        return cls(
            id=uuid7(),
            owner_id=owner_id,
            customer_name=customer_name,
            slot=slot,
            party_size=party_size,
            table_id=table.id,
            table_name=table.name,
            created_at=datetime.now(timezone.utc),
        )


def validate_party_size(party_size: int) -> None:
    # bool is an int subclass
    if isinstance(party_size, bool) or not isinstance(party_size, int) or party_size < 1:
        raise InvalidPartySizeError(f'Party size must be a positive integer, got {party_size!r}')
