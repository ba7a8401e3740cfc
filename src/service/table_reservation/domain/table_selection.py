"""
Table Selection Domain
Pure table choice logic for one slot - no database, no locking
"""

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import AbstractSet, Iterable, List, Optional

from src.platform.exception.exceptions import DomainError
from src.service.table_reservation.domain.entity.table_entity import Table


class TableSelectionPolicy(StrEnum):
    SMALLEST_FIT = 'smallest_fit'
    FIRST_MATCH = 'first_match'


def find_suitable_tables(tables: Iterable[Table], party_size: int) -> List[Table]:
    """Tables able to seat the party, in catalog (id) order"""
    return sorted((t for t in tables if t.can_seat(party_size)), key=lambda t: t.id)


class TableSelectionStrategy(ABC):
    """Table selection strategy (strategy pattern)"""

    policy: TableSelectionPolicy

    def select(
        self, *, suitable_tables: Iterable[Table], committed_table_ids: AbstractSet[int]
    ) -> Optional[Table]:
        """Pick one suitable table not committed for the slot, or None when all are taken"""
        candidates = [t for t in suitable_tables if t.id not in committed_table_ids]
        if not candidates:
            return None
        return self._choose(candidates)

    @abstractmethod
    def _choose(self, candidates: List[Table]) -> Table:
        pass


class SmallestFitSelection(TableSelectionStrategy):
    """Smallest table that fits, ties broken by lowest table id"""

    policy = TableSelectionPolicy.SMALLEST_FIT

    def _choose(self, candidates: List[Table]) -> Table:
        return min(candidates, key=lambda t: (t.capacity, t.id))


class FirstMatchSelection(TableSelectionStrategy):
    """First free table in catalog order"""

    policy = TableSelectionPolicy.FIRST_MATCH

    def _choose(self, candidates: List[Table]) -> Table:
        return min(candidates, key=lambda t: t.id)


_STRATEGIES: dict[TableSelectionPolicy, type[TableSelectionStrategy]] = {
    TableSelectionPolicy.SMALLEST_FIT: SmallestFitSelection,
    TableSelectionPolicy.FIRST_MATCH: FirstMatchSelection,
}


def build_selection_strategy(policy: str) -> TableSelectionStrategy:
    try:
        return _STRATEGIES[TableSelectionPolicy(policy)]()
    except ValueError:
        valid = ', '.join(p.value for p in TableSelectionPolicy)
        raise DomainError(f'Unknown table selection policy: {policy}. Must be one of: {valid}', 500)
