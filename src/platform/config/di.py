"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.state.keyed_lock import KeyedLock
from src.service.table_reservation.domain.table_selection import build_selection_strategy
from src.service.table_reservation.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.table_command_repo_impl import (
    TableCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.table_query_repo_impl import (
    TableQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.user_query_repo_impl import (
    UserQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.table_reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)
    service_times = config_service.provided.SERVICE_TIMES
    reservation_commit_max_attempts = config_service.provided.RESERVATION_COMMIT_MAX_ATTEMPTS

    # Database (uses AsyncEngineManager, one engine per event loop)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per-call)
    table_query_repo = providers.Singleton(
        TableQueryRepoImpl, session_factory=database.provided.session
    )
    table_command_repo = providers.Singleton(
        TableCommandRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_command_repo = providers.Singleton(
        ReservationCommandRepoImpl, session_factory=database.provided.session
    )

    # Auth
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    jwt_auth = providers.Singleton(JwtAuth)

    # Allocation
    table_selection_strategy = providers.Singleton(
        build_selection_strategy, policy=config_service.provided.TABLE_SELECTION_POLICY
    )
    # Per-slot mutual exclusion shared by every allocation in this process
    slot_lock = providers.Singleton(KeyedLock)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
