from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.domain.access_policy import AccessPolicy
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.entity.user_entity import UserEntity


class CancelReservationUseCase:
    """
    Hard-delete a reservation, freeing its (slot, table) pair.

    The access policy is checked before anything is deleted.
    """

    def __init__(
        self,
        *,
        reservation_query_repo: IReservationQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
    ) -> None:
        self.reservation_query_repo = reservation_query_repo
        self.reservation_command_repo = reservation_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
    ) -> Self:
        return cls(
            reservation_query_repo=reservation_query_repo,
            reservation_command_repo=reservation_command_repo,
        )

    @Logger.io
    async def cancel(self, *, reservation_id: UUID, requester: UserEntity) -> Reservation:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if not reservation:
            metrics.record_cancellation(result='not_found')
            raise NotFoundError('Reservation not found')

        try:
            AccessPolicy.ensure_can_cancel(
                requester_role=requester.role,
                requester_id=requester.id or 0,
                reservation=reservation,
            )
        except ForbiddenError:
            metrics.record_cancellation(result='forbidden')
            raise

        # A concurrent cancel may have removed it in between
        if not await self.reservation_command_repo.delete(reservation_id=reservation_id):
            metrics.record_cancellation(result='not_found')
            raise NotFoundError('Reservation not found')

        metrics.record_cancellation(result='cancelled')
        Logger.base.info(
            f'🗑️ [CANCEL] Reservation {reservation_id} ({reservation.table_name} at '
            f'{reservation.slot}) cancelled by user {requester.id}'
        )
        return reservation
