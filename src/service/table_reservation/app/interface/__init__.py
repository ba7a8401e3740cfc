"""Application layer interfaces (Ports)"""

from src.service.table_reservation.app.interface.i_password_hasher import IPasswordHasher
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.app.interface.i_table_command_repo import ITableCommandRepo
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.table_reservation.app.interface.i_user_query_repo import IUserQueryRepo


__all__ = [
    'IPasswordHasher',
    'IReservationCommandRepo',
    'IReservationQueryRepo',
    'ITableCommandRepo',
    'ITableQueryRepo',
    'IUserCommandRepo',
    'IUserQueryRepo',
]
