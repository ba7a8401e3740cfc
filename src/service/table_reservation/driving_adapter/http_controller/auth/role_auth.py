from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.table_reservation.domain.access_policy import AccessPolicy
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: str | None = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Current user rebuilt from the JWT cookie (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_privileged(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_privileged',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not AccessPolicy.is_privileged(current_user.role):
            raise ForbiddenError('Only staff, managers and admins can perform this action')
        return current_user
