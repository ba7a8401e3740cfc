from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TableModel(Base):
    __tablename__ = 'dining_table'
    __table_args__ = (CheckConstraint('capacity > 0', name='ck_dining_table_capacity_positive'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self):
        return f'<TableModel(id={self.id}, name={self.name}, capacity={self.capacity})>'
