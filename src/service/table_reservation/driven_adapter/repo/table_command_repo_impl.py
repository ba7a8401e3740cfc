from typing import AsyncContextManager, Callable, List, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_command_repo import ITableCommandRepo
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.driven_adapter.model.table_model import TableModel
from src.service.table_reservation.driven_adapter.repo.store_session import store_session


class TableCommandRepoImpl(ITableCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create_many(self, *, tables: Sequence[tuple[str, int]]) -> List[Table]:
        async with store_session(self.session_factory) as session:
            models = [TableModel(name=name, capacity=capacity) for name, capacity in tables]
            session.add_all(models)
            await session.commit()

            return [Table(id=m.id, name=m.name, capacity=m.capacity) for m in models]
