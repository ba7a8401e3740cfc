"""
User Management Use Cases (Use Case Layer)
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.table_reservation.app.interface.i_password_hasher import IPasswordHasher
from src.service.table_reservation.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.table_reservation.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.table_reservation.domain.entity.user_entity import UserEntity, UserRole


class UserUseCase:
    """User management use case class with proper dependency injection (CQRS)"""

    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.CUSTOMER,
    ) -> UserEntity:
        UserEntity.validate_role(role)
        if await self.user_query_repo.exists_by_email(email):
            raise ConflictError(f'User with email {email} already exists')

        user_entity = UserEntity(email=email, name=name, role=UserRole(role), is_active=True)
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity)

    @Logger.io
    async def get_user_by_id(self, user_id: int) -> UserEntity | None:
        return await self.user_query_repo.get_by_id(user_id)
