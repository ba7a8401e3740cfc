from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.dto.reservation_view import ReservationView
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.access_policy import AccessPolicy
from src.service.table_reservation.domain.entity.user_entity import UserEntity


class ListReservationsUseCase:
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
    async def list_visible(self, *, requester: UserEntity) -> List[ReservationView]:
        """Privileged roles get every reservation; customers only their own"""
        requester_id = requester.id or 0
        if AccessPolicy.can_view_all(requester.role):
            reservations = await self.reservation_query_repo.list_all()
        else:
            reservations = await self.reservation_query_repo.list_by_owner(owner_id=requester_id)

        visible = AccessPolicy.visible_reservations(
            requester_role=requester.role, requester_id=requester_id, reservations=reservations
        )
        return [
            ReservationView(
                reservation=r,
                can_cancel=AccessPolicy.decide(
                    requester_role=requester.role,
                    requester_id=requester_id,
                    owner_id=r.owner_id,
                ).cancelable,
            )
            for r in visible
        ]
