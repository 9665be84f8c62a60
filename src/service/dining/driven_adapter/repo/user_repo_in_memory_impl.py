from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.dining.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore


class UserQueryRepoInMemoryImpl(IUserQueryRepo):
    def __init__(self, store: InMemoryDataStore, settings: Settings) -> None:
        self.store = store
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with store_call('user.get_by_email', timeout_seconds=self.timeout):
            user_entity = self.store.users_by_email.get(email)

        # Hand out copies so callers never mutate the stored row
        return attrs.evolve(user_entity) if user_entity else None


class UserCommandRepoInMemoryImpl(IUserCommandRepo):
    def __init__(self, store: InMemoryDataStore, settings: Settings) -> None:
        self.store = store
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with store_call('user.create', timeout_seconds=self.timeout):
            if user_entity.email in self.store.users_by_email:
                raise ConflictError(f'User with email {user_entity.email} already exists')

            created = attrs.evolve(
                user_entity,
                id=user_entity.id or new_entity_id(),
                updated_at=datetime.now(timezone.utc),
            )
            self.store.users_by_email[created.email] = created

        return attrs.evolve(created)
