"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.table_reservation.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.table_reservation.driven_adapter.model.table_model import TableModel
from src.service.table_reservation.driven_adapter.model.user_model import UserModel

__all__ = [
    'ReservationModel',
    'TableModel',
    'UserModel',
]
