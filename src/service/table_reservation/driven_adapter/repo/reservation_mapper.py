from datetime import timezone
import uuid

from uuid_utils import UUID

from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.value_object.slot import Slot
from src.service.table_reservation.driven_adapter.model.reservation_model import ReservationModel


def to_db_uuid(value: UUID) -> uuid.UUID:
    # sqlalchemy.Uuid binds stdlib uuid.UUID only
    return uuid.UUID(str(value))


def model_to_entity(model: ReservationModel) -> Reservation:
    created_at = model.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return Reservation(
        id=UUID(str(model.id)),
        owner_id=model.owner_id,
        customer_name=model.customer_name,
        slot=Slot(date=model.date, time=model.time),
        party_size=model.party_size,
        table_id=model.table_id,
        table_name=model.table_name,
        created_at=created_at,
    )


def entity_to_model(reservation: Reservation) -> ReservationModel:
    return ReservationModel(
        id=to_db_uuid(reservation.id),
        owner_id=reservation.owner_id,
        customer_name=reservation.customer_name,
        date=reservation.slot.date,
        time=reservation.slot.time,
        party_size=reservation.party_size,
        table_id=reservation.table_id,
        table_name=reservation.table_name,
        created_at=reservation.created_at.astimezone(timezone.utc),
    )
