"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.table_reservation.domain.entity.user_entity import UserRole


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'email': 'guest@example.com',
                'password': 'P@ssw0rd',
                'name': 'Alice Chen',
                'role': 'customer',
            }
        }
    )

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.CUSTOMER


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'guest@example.com', 'password': 'P@ssw0rd'}}
    )

    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)


class UserResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'email': 'guest@example.com',
                'name': 'Alice Chen',
                'role': 'customer',
                'is_active': True,
            }
        },
    )

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
