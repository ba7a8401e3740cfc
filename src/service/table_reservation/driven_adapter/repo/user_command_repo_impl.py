from typing import AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.driven_adapter.repo.user_query_repo_impl import (
    user_model_to_entity,
)
from src.service.table_reservation.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            await session.commit()
            await session.refresh(user_model)

            return user_model_to_entity(user_model)
