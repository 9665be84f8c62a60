from datetime import datetime, timezone
from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.model.user_model import UserModel
from src.service.dining.driven_adapter.repo.user_query_repo_impl import _model_to_entity


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        settings: Settings,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        user_model = UserModel(
            id=user_entity.id or new_entity_id(),
            email=user_entity.email,
            hashed_password=user_entity.hashed_password,
            role=user_entity.role.value,
            username=user_entity.username,
            phone_number=user_entity.phone_number,
            updated_at=datetime.now(timezone.utc),
        )

        async with store_call('user.create', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                session.add(user_model)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    raise ConflictError(
                        f'User with email {user_entity.email} already exists'
                    ) from e
                await session.refresh(user_model)

        return _model_to_entity(user_model)
