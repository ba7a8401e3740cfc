"""
Table reservation business outcomes and faults

Rejections (400 + code) are expected answers to the caller.
Transient errors (503 + Retry-After) mean the caller may simply retry.
"""

from src.platform.exception.exceptions import BusinessRejection, TransientError


class NoCapacityError(BusinessRejection):
    """No table in the catalog can seat the party"""

    code = 'NO_CAPACITY'


class SlotFullError(BusinessRejection):
    """Tables big enough exist, but every one is already committed for the slot"""

    code = 'SLOT_FULL'


class InvalidSlotError(BusinessRejection):
    code = 'INVALID_SLOT'


class InvalidPartySizeError(BusinessRejection):
    code = 'INVALID_PARTY_SIZE'


class AllocationConflictError(TransientError):
    """Commit kept losing to concurrent writers until the attempt budget ran out"""

    code = 'CONFLICT'


class ReservationStoreUnavailableError(TransientError):
    code = 'STORE_UNAVAILABLE'


class SlotTableAlreadyCommittedError(Exception):
    """Raised by the store when (slot, table) is already taken; handled inside allocation"""

    def __init__(self, *, slot_key: str, table_id: int) -> None:
        self.slot_key = slot_key
        self.table_id = table_id
        super().__init__(f'Table {table_id} is already committed for slot {slot_key}')
