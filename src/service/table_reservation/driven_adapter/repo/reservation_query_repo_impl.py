from typing import AsyncContextManager, Callable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.value_object.slot import Slot
from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel
from src.service.table_reservation.driven_adapter.repo.reservation_mapper import (
    model_to_entity,
    to_db_uuid,
)
from src.service.table_reservation.driven_adapter.repo.store_session import store_session


_ORDERING = (ReservationModel.date, ReservationModel.time, ReservationModel.created_at)


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        async with store_session(self.session_factory) as session:
            model = await session.get(ReservationModel, to_db_uuid(reservation_id))
            return model_to_entity(model) if model else None

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(select(ReservationModel).order_by(*_ORDERING))
            return [model_to_entity(m) for m in result.scalars()]

    @Logger.io
    async def list_by_owner(self, *, owner_id: int) -> List[Reservation]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.owner_id == owner_id)
                .order_by(*_ORDERING)
            )
            return [model_to_entity(m) for m in result.scalars()]

    @Logger.io
    async def list_by_slot(self, *, slot: Slot) -> List[Reservation]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.date == slot.date, ReservationModel.time == slot.time)
                .order_by(ReservationModel.table_id)
            )
            return [model_to_entity(m) for m in result.scalars()]

    @Logger.io
    async def list_committed_table_ids(self, *, slot: Slot) -> Set[int]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(
                select(ReservationModel.table_id).where(
                    ReservationModel.date == slot.date, ReservationModel.time == slot.time
                )
            )
            return set(result.scalars())
