from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.driven_adapter.model.table_model import TableModel
from src.service.table_reservation.driven_adapter.repo.store_session import store_session


class TableQueryRepoImpl(ITableQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def list_all(self) -> List[Table]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(select(TableModel).order_by(TableModel.id))
            return [self._model_to_entity(m) for m in result.scalars()]

    @Logger.io
    async def list_by_min_capacity(self, *, min_capacity: int) -> List[Table]:
        async with store_session(self.session_factory) as session:
            result = await session.execute(
                select(TableModel)
                .where(TableModel.capacity >= min_capacity)
                .order_by(TableModel.id)
            )
            return [self._model_to_entity(m) for m in result.scalars()]

    @Logger.io
    async def get_by_id(self, *, table_id: int) -> Optional[Table]:
        async with store_session(self.session_factory) as session:
            model = await session.get(TableModel, table_id)
            return self._model_to_entity(model) if model else None

    @Logger.io
    async def count(self) -> int:
        async with store_session(self.session_factory) as session:
            result = await session.execute(select(func.count()).select_from(TableModel))
            return result.scalar_one()

    @staticmethod
    def _model_to_entity(model: TableModel) -> Table:
        return Table(id=model.id, name=model.name, capacity=model.capacity)
