from pydantic import BaseModel, ConfigDict

from src.service.table_reservation.domain.entity.table_entity import Table


class TableResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'id': 2, 'name': 'Table 2', 'capacity': 4}}
    )

    id: int
    name: str
    capacity: int

    @classmethod
    def from_entity(cls, table: Table) -> 'TableResponse':
        return cls(id=table.id, name=table.name, capacity=table.capacity)


class SeedTablesResponse(BaseModel):
    created: list[TableResponse]
    already_seeded: bool
