from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.domain.entity.table_entity import Table


class ListTablesUseCase:
    def __init__(self, table_query_repo: ITableQueryRepo) -> None:
        self.table_query_repo = table_query_repo

    @classmethod
    @inject
    def depends(
        cls, table_query_repo: ITableQueryRepo = Depends(Provide[Container.table_query_repo])
    ) -> Self:
        return cls(table_query_repo=table_query_repo)

    @Logger.io
    async def list_tables(self) -> List[Table]:
        return await self.table_query_repo.list_all()
