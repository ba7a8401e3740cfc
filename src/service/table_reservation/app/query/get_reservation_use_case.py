from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.dto.reservation_view import ReservationView
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.access_policy import AccessPolicy
from src.service.table_reservation.domain.entity.user_entity import UserEntity


class GetReservationUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def get(self, *, reservation_id: UUID, requester: UserEntity) -> ReservationView:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if not reservation:
            raise NotFoundError('Reservation not found')

        AccessPolicy.ensure_can_view(
            requester_role=requester.role,
            requester_id=requester.id or 0,
            reservation=reservation,
        )
        decision = AccessPolicy.decide(
            requester_role=requester.role,
            requester_id=requester.id or 0,
            owner_id=reservation.owner_id,
        )
        return ReservationView(reservation=reservation, can_cancel=decision.cancelable)
