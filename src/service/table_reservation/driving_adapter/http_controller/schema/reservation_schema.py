from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.table_reservation.app.dto.reservation_view import (
    ReservationView,
    SlotAvailability,
)
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.driving_adapter.http_controller.schema.table_schema import (
    TableResponse,
)


class ReservationCreateRequest(BaseModel):
    """date/time/party_size are validated by the allocation rules, not here"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'date': '2024-06-01',
                'time': '18:00',
                'party_size': 3,
                'customer_name': 'Alice Chen',
            }
        }
    )

    date: str = Field(..., description='YYYY-MM-DD')
    time: str = Field(..., description='One of the configured service times, e.g. 18:00')
    party_size: int = Field(..., strict=True)
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)


class ReservationResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01234567-89ab-7def-0123-456789abcdef',
                'owner_id': 1,
                'customer_name': 'Alice Chen',
                'date': '2024-06-01',
                'time': '18:00',
                'party_size': 3,
                'table_id': 2,
                'table_name': 'Table 2',
                'created_at': '2024-05-20T10:30:00Z',
                'can_cancel': True,
            }
        }
    )

    id: UtilsUUID7
    owner_id: int
    customer_name: str
    date: str
    time: str
    party_size: int
    table_id: int
    table_name: str
    created_at: datetime
    can_cancel: bool = True

    @classmethod
    def from_entity(cls, reservation: Reservation, *, can_cancel: bool = True) -> 'ReservationResponse':
        return cls(
            id=reservation.id,
            owner_id=reservation.owner_id,
            customer_name=reservation.customer_name,
            date=reservation.slot.date.isoformat(),
            time=reservation.slot.time,
            party_size=reservation.party_size,
            table_id=reservation.table_id,
            table_name=reservation.table_name,
            created_at=reservation.created_at,
            can_cancel=can_cancel,
        )

    @classmethod
    def from_view(cls, view: ReservationView) -> 'ReservationResponse':
        return cls.from_entity(view.reservation, can_cancel=view.can_cancel)


class SlotAvailabilityResponse(BaseModel):
    date: str
    time: str
    free_tables: List[TableResponse]
    committed_table_ids: List[int]

    @classmethod
    def from_dto(cls, availability: SlotAvailability) -> 'SlotAvailabilityResponse':
        return cls(
            date=availability.slot.date.isoformat(),
            time=availability.slot.time,
            free_tables=[TableResponse.from_entity(t) for t in availability.free_tables],
            committed_table_ids=availability.committed_table_ids,
        )


class CancelReservationResponse(BaseModel):
    id: UtilsUUID7
    status: str = 'cancelled'
