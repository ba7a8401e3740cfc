import datetime as dt
import uuid

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


# Referenced when translating IntegrityError into a slot conflict
SLOT_TABLE_UNIQUE_CONSTRAINT = 'uq_reservation_slot_table'


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (
        # At most one reservation per (slot, table)
        UniqueConstraint('date', 'time', 'table_id', name=SLOT_TABLE_UNIQUE_CONSTRAINT),
        CheckConstraint('party_size >= 1', name='ck_reservation_party_size_positive'),
        Index('ix_reservation_owner_id', 'owner_id'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    table_id: Mapped[int] = mapped_column(Integer, ForeignKey('dining_table.id'), nullable=False)
    table_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return (
            f'<ReservationModel(id={self.id}, date={self.date}, time={self.time}, '
            f'table_id={self.table_id})>'
        )
