from abc import ABC, abstractmethod
from typing import List, Optional, Set

from uuid_utils import UUID

from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.value_object.slot import Slot


class IReservationQueryRepo(ABC):
    """Reservation read port; listings are ordered by date, time, then creation"""

    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner_id: int) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_slot(self, *, slot: Slot) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_committed_table_ids(self, *, slot: Slot) -> Set[int]:
        pass
