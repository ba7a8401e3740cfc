from typing import AsyncContextManager, Callable

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.reservation_errors import (
    SlotTableAlreadyCommittedError,
)
from src.service.table_reservation.driven_adapter.model.reservation_model import (
    SLOT_TABLE_UNIQUE_CONSTRAINT,
    ReservationModel,
)
from src.service.table_reservation.driven_adapter.repo.reservation_mapper import (
    entity_to_model,
    to_db_uuid,
)
from src.service.table_reservation.driven_adapter.repo.store_session import store_session


# SQLite names the columns instead of the constraint
_SQLITE_SLOT_TABLE_COLUMNS = 'reservation.date, reservation.time, reservation.table_id'


def is_slot_table_violation(error: IntegrityError) -> bool:
    message = str(error.orig) if error.orig is not None else str(error)
    return SLOT_TABLE_UNIQUE_CONSTRAINT in message or _SQLITE_SLOT_TABLE_COLUMNS in message


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        try:
            async with store_session(self.session_factory) as session:
                session.add(entity_to_model(reservation))
                await session.commit()
        except IntegrityError as e:
            if is_slot_table_violation(e):
                raise SlotTableAlreadyCommittedError(
                    slot_key=reservation.slot.key, table_id=reservation.table_id
                ) from e
            raise

        return reservation

    @Logger.io
    async def delete(self, *, reservation_id: UUID) -> bool:
        async with store_session(self.session_factory) as session:
            result = await session.execute(
                delete(ReservationModel).where(ReservationModel.id == to_db_uuid(reservation_id))
            )
            await session.commit()

        return result.rowcount > 0  # type: ignore[attr-defined]
