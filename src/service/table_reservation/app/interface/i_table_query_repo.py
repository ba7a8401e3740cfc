from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.table_reservation.domain.entity.table_entity import Table


class ITableQueryRepo(ABC):
    """Table catalog read port"""

    @abstractmethod
    async def list_all(self) -> List[Table]:
        pass

    @abstractmethod
    async def list_by_min_capacity(self, *, min_capacity: int) -> List[Table]:
        """Tables with capacity >= min_capacity, ordered by id"""
        pass

    @abstractmethod
    async def get_by_id(self, *, table_id: int) -> Optional[Table]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
