from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    ForbiddenError,
    LoginError,
)


if TYPE_CHECKING:
    from src.service.table_reservation.app.interface.i_password_hasher import IPasswordHasher


class UserRole(str, Enum):
    CUSTOMER = 'customer'
    STAFF = 'staff'
    MANAGER = 'manager'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    role: UserRole = UserRole.CUSTOMER
    is_active: bool = True
    created_at: Optional[datetime] = None

    def validate_exists(self) -> None:
        if not self.id or not self.email:
            raise AuthenticationError('User not found')

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity

    @staticmethod
    def validate_role(role: UserRole | str) -> None:
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')

    def set_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> None:
        from src.service.table_reservation.app.interface.i_password_hasher import IPasswordHasher

        if not isinstance(password_hasher, IPasswordHasher):
            raise TypeError('password_hasher must implement IPasswordHasher interface')

        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
