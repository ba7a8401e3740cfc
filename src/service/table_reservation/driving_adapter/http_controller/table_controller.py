from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.command.seed_tables_use_case import SeedTablesUseCase
from src.service.table_reservation.app.query.list_tables_use_case import ListTablesUseCase
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_privileged,
)
from src.service.table_reservation.driving_adapter.http_controller.schema.table_schema import (
    SeedTablesResponse,
    TableResponse,
)


router = APIRouter()


@router.get('', response_model=list[TableResponse])
@Logger.io
async def list_tables(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> list[TableResponse]:
    return [TableResponse.from_entity(t) for t in await use_case.list_tables()]


@router.post('/seed', response_model=SeedTablesResponse, status_code=status.HTTP_200_OK)
@Logger.io
async def seed_tables(
    current_user: UserEntity = Depends(require_privileged),
    use_case: SeedTablesUseCase = Depends(SeedTablesUseCase.depends),
) -> SeedTablesResponse:
    created = await use_case.seed()
    return SeedTablesResponse(
        created=[TableResponse.from_entity(t) for t in created],
        already_seeded=not created,
    )
