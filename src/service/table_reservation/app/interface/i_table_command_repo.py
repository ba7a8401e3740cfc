from abc import ABC, abstractmethod
from typing import List, Sequence

from src.service.table_reservation.domain.entity.table_entity import Table


class ITableCommandRepo(ABC):
    """Table catalog write port (seeding only)"""

    @abstractmethod
    async def create_many(self, *, tables: Sequence[tuple[str, int]]) -> List[Table]:
        """Insert (name, capacity) pairs and return the stored tables"""
        pass
