from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.table_reservation.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """
        Persist a reservation.

        Raises:
            SlotTableAlreadyCommittedError: (slot, table) already has a reservation
            ReservationStoreUnavailableError: store could not be reached or was locked
        """
        pass

    @abstractmethod
    async def delete(self, *, reservation_id: UUID) -> bool:
        """Delete by id; False when nothing was deleted"""
        pass
