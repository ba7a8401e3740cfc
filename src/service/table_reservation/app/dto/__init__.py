"""Application layer DTOs"""

from src.service.table_reservation.app.dto.reservation_view import (
    ReservationView,
    SlotAvailability,
)

__all__ = [
    'ReservationView',
    'SlotAvailability',
]
