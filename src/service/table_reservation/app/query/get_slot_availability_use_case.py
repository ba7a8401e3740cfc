from typing import Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.dto.reservation_view import SlotAvailability
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.domain.entity.reservation_entity import validate_party_size
from src.service.table_reservation.domain.value_object.slot import Slot


class GetSlotAvailabilityUseCase:
    def __init__(
        self,
        *,
        table_query_repo: ITableQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        service_times: Sequence[str],
    ) -> None:
        self.table_query_repo = table_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.service_times = service_times

    @classmethod
    @inject
    def depends(
        cls,
        table_query_repo: ITableQueryRepo = Depends(Provide[Container.table_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        service_times: list[str] = Depends(Provide[Container.service_times]),
    ) -> Self:
        return cls(
            table_query_repo=table_query_repo,
            reservation_query_repo=reservation_query_repo,
            service_times=service_times,
        )

    @Logger.io
    async def get_availability(
        self, *, date: str, time: str, min_capacity: int = 1
    ) -> SlotAvailability:
        slot = Slot.parse(date=date, time=time, service_times=self.service_times)
        validate_party_size(min_capacity)

        tables = await self.table_query_repo.list_by_min_capacity(min_capacity=min_capacity)
        committed = await self.reservation_query_repo.list_committed_table_ids(slot=slot)

        return SlotAvailability(
            slot=slot,
            free_tables=[t for t in tables if t.id not in committed],
            committed_table_ids=sorted(committed),
        )
