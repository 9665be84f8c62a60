"""
User Management Use Cases (Use Case Layer)
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_password_hasher import IPasswordHasher
from src.service.dining.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.dining.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.dining.domain.entity.user_entity import UserEntity, UserRole


class UserUseCase:
    """User management use case class with proper dependency injection (CQRS)"""

    def __init__(
        self,
        *,
        password_hasher: IPasswordHasher,
        user_command_repo: IUserCommandRepo | None = None,
        user_query_repo: IUserQueryRepo | None = None,
    ) -> None:
        self.password_hasher = password_hasher
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            password_hasher=password_hasher,
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def sign_up(
        self, *, email: str, password: str, username: str = '', phone_number: str = ''
    ) -> UserEntity:
        if not self.user_command_repo:
            raise RuntimeError('UserCommandRepo not injected')

        # Self-service sign-up never grants admin
        user_entity = UserEntity(
            email=email, username=username, phone_number=phone_number, role=UserRole.USER
        )
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity)

    @Logger.io
    async def get_user_by_email(self, email: str) -> UserEntity:
        if not self.user_query_repo:
            raise RuntimeError('UserQueryRepo not injected')

        user_entity = await self.user_query_repo.get_by_email(email)
        if not user_entity:
            raise NotFoundError('User not found')

        return user_entity
