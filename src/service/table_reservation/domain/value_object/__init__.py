from src.service.table_reservation.domain.value_object.slot import Slot


__all__ = ['Slot']
