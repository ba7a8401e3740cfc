from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Table Reservation System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'reservation_auth'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Database (postgresql+asyncpg://... in production)
    DATABASE_URL_ASYNC: str = f'sqlite+aiosqlite:///{_PROJECT_ROOT / "table_reservation.db"}'
    DB_POOL_PRE_PING: bool = True

    # Reservation rules
    SERVICE_TIMES: List[str] = ['17:00', '18:00', '19:00', '20:00']
    TABLE_SELECTION_POLICY: str = 'smallest_fit'  # smallest_fit | first_match
    RESERVATION_COMMIT_MAX_ATTEMPTS: int = 3
    SEED_TABLES_ON_STARTUP: bool = False

    @field_validator('SERVICE_TIMES', mode='before')
    @classmethod
    def assemble_service_times(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        return v

    @field_validator('RESERVATION_COMMIT_MAX_ATTEMPTS')
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError('RESERVATION_COMMIT_MAX_ATTEMPTS must be at least 1')
        return v


settings = Settings()  # type: ignore
