from typing import List, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_command_repo import ITableCommandRepo
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.domain.entity.table_entity import (
    DEFAULT_TABLE_CATALOG,
    Table,
)


class SeedTablesUseCase:
    """Insert the default table catalog once; a non-empty catalog is left untouched"""

    def __init__(
        self, *, table_query_repo: ITableQueryRepo, table_command_repo: ITableCommandRepo
    ) -> None:
        self.table_query_repo = table_query_repo
        self.table_command_repo = table_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        table_query_repo: ITableQueryRepo = Depends(Provide[Container.table_query_repo]),
        table_command_repo: ITableCommandRepo = Depends(Provide[Container.table_command_repo]),
    ) -> Self:
        return cls(table_query_repo=table_query_repo, table_command_repo=table_command_repo)

    @Logger.io
    async def seed(
        self, *, catalog: Sequence[tuple[str, int]] = DEFAULT_TABLE_CATALOG
    ) -> List[Table]:
        """Returns the tables created by this call (empty when already seeded)"""
        if await self.table_query_repo.count():
            Logger.base.info('🪑 [SEED] Table catalog already seeded, skipping')
            return []

        tables = await self.table_command_repo.create_many(tables=catalog)
        Logger.base.info(f'🪑 [SEED] Created {len(tables)} tables')
        return tables
