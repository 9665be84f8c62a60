from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.dining.domain.entity.user_entity import UserEntity, UserRole
from src.service.dining.driven_adapter.model.user_model import UserModel


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        settings: Settings,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with store_call('user.get_by_email', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(select(UserModel).where(UserModel.email == email))
                user_model = result.scalar_one_or_none()

        if not user_model:
            return None

        return _model_to_entity(user_model)


def _model_to_entity(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        username=user_model.username,
        phone_number=user_model.phone_number,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        updated_at=user_model.updated_at,
    )
