"""Reservation read-model DTOs."""

from typing import List

import attrs

from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.value_object.slot import Slot


@attrs.define(frozen=True)
class ReservationView:
    """A reservation as seen by one requester, with what that requester may do to it"""

    reservation: Reservation
    can_cancel: bool


@attrs.define(frozen=True)
class SlotAvailability:
    """
    Tables free for a slot.

    free_tables is a snapshot; a concurrent allocation may take any of them.
    """

    slot: Slot
    free_tables: List[Table]
    committed_table_ids: List[int]
