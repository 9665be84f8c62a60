"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore
from src.service.dining.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.dining.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.dining.driven_adapter.repo.reservation_repo_in_memory_impl import (
    ReservationCommandRepoInMemoryImpl,
    ReservationQueryRepoInMemoryImpl,
)
from src.service.dining.driven_adapter.repo.restaurant_query_repo_impl import (
    RestaurantQueryRepoImpl,
)
from src.service.dining.driven_adapter.repo.restaurant_query_repo_in_memory_impl import (
    RestaurantQueryRepoInMemoryImpl,
)
from src.service.dining.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.dining.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.dining.driven_adapter.repo.user_repo_in_memory_impl import (
    UserCommandRepoInMemoryImpl,
    UserQueryRepoInMemoryImpl,
)
from src.service.dining.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.dining.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration (override in tests with providers.Object(Settings(...)))
    config_service = providers.Object(settings)

    # Backends: only the one selected by STORE_BACKEND is ever instantiated
    database = providers.Singleton(Database, settings=config_service)
    memory_store = providers.Singleton(InMemoryDataStore)

    # Repositories (stateless - use session_factory per-call)
    user_query_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        postgres=providers.Singleton(
            UserQueryRepoImpl, session_factory=database.provided.session, settings=config_service
        ),
        memory=providers.Singleton(
            UserQueryRepoInMemoryImpl, store=memory_store, settings=config_service
        ),
    )
    user_command_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        postgres=providers.Singleton(
            UserCommandRepoImpl, session_factory=database.provided.session, settings=config_service
        ),
        memory=providers.Singleton(
            UserCommandRepoInMemoryImpl, store=memory_store, settings=config_service
        ),
    )
    restaurant_query_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        postgres=providers.Singleton(
            RestaurantQueryRepoImpl,
            session_factory=database.provided.session,
            settings=config_service,
        ),
        memory=providers.Singleton(
            RestaurantQueryRepoInMemoryImpl, store=memory_store, settings=config_service
        ),
    )
    reservation_query_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        postgres=providers.Singleton(
            ReservationQueryRepoImpl,
            session_factory=database.provided.session,
            settings=config_service,
        ),
        memory=providers.Singleton(
            ReservationQueryRepoInMemoryImpl, store=memory_store, settings=config_service
        ),
    )
    reservation_command_repo = providers.Selector(
        config_service.provided.STORE_BACKEND,
        postgres=providers.Singleton(
            ReservationCommandRepoImpl,
            session_factory=database.provided.session,
            settings=config_service,
        ),
        memory=providers.Singleton(
            ReservationCommandRepoInMemoryImpl, store=memory_store, settings=config_service
        ),
    )

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(
        JwtAuth, settings=config_service, password_hasher=password_hasher
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
