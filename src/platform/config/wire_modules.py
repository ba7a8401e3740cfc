"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.table_reservation.app.command import (
    allocate_table_use_case,
    cancel_reservation_use_case,
    seed_tables_use_case,
)
from src.service.table_reservation.app.query import (
    get_reservation_use_case,
    get_slot_availability_use_case,
    list_reservations_use_case,
    list_tables_use_case,
    user_query_use_case,
)
from src.service.table_reservation.driving_adapter.http_controller import user_controller
from src.service.table_reservation.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    allocate_table_use_case,
    cancel_reservation_use_case,
    seed_tables_use_case,
    get_reservation_use_case,
    get_slot_availability_use_case,
    list_reservations_use_case,
    list_tables_use_case,
    user_query_use_case,
    user_controller,
    role_auth,
]
