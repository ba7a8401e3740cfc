from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.table_reservation.app.query.user_query_use_case import UserUseCase
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.table_reservation.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.table_reservation.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    UserResponse,
)


router = APIRouter()


def _to_response(user_entity: UserEntity) -> UserResponse:
    return UserResponse(
        id=user_entity.id or 0,
        email=user_entity.email,
        name=user_entity.name,
        role=user_entity.role,
        is_active=user_entity.is_active,
    )


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    use_case: UserUseCase = Depends(UserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.create_user(
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
        role=request.role,
    )
    return _to_response(user_entity)


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=jwt_auth.create_jwt_token(user_entity),
        max_age=jwt_auth.token_max_age_seconds,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )

    return _to_response(user_entity)


@router.get('', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return _to_response(current_user)
