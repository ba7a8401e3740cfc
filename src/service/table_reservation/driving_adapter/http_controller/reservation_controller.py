from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.table_reservation.app.command.allocate_table_use_case import (
    AllocateTableUseCase,
)
from src.service.table_reservation.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.table_reservation.app.query.get_reservation_use_case import (
    GetReservationUseCase,
)
from src.service.table_reservation.app.query.get_slot_availability_use_case import (
    GetSlotAvailabilityUseCase,
)
from src.service.table_reservation.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.table_reservation.driving_adapter.http_controller.schema.reservation_schema import (
    CancelReservationResponse,
    ReservationCreateRequest,
    ReservationResponse,
    SlotAvailabilityResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=list[ReservationResponse])
@Logger.io
async def list_reservations(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> list[ReservationResponse]:
    """Customers see their own reservations; staff, managers and admins see all."""
    views = await use_case.list_visible(requester=current_user)
    return [ReservationResponse.from_view(v) for v in views]


@router.post('', response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: AllocateTableUseCase = Depends(AllocateTableUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.create_reservation') as span:
        span.set_attribute('requester.id', current_user.id or 0)
        span.set_attribute('party_size', request.party_size)

        reservation = await use_case.allocate(
            date=request.date,
            time=request.time,
            party_size=request.party_size,
            requester=current_user,
            customer_name=request.customer_name,
        )

        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation, can_cancel=True)


@router.get('/availability', response_model=SlotAvailabilityResponse)
@Logger.io
async def get_availability(
    date: str = Query(..., description='YYYY-MM-DD'),
    time: str = Query(..., description='Service time, e.g. 18:00'),
    party_size: int = Query(1),
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> SlotAvailabilityResponse:
    availability = await use_case.get_availability(
        date=date, time=time, min_capacity=party_size
    )
    return SlotAvailabilityResponse.from_dto(availability)


@router.get('/{reservation_id}', response_model=ReservationResponse)
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    view = await use_case.get(reservation_id=reservation_id, requester=current_user)
    return ReservationResponse.from_view(view)


@router.delete('/{reservation_id}', response_model=CancelReservationResponse)
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> CancelReservationResponse:
    reservation = await use_case.cancel(reservation_id=reservation_id, requester=current_user)
    return CancelReservationResponse(id=reservation.id)
