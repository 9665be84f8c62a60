from abc import ABC, abstractmethod

from src.service.dining.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """Identity store - write side, used only at sign-up"""

    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """
        Persist a new user

        Raises:
            ConflictError: If the email is already registered
        """
        pass
