from abc import ABC, abstractmethod
from typing import Optional

from src.service.dining.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    """Identity store - read side"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass
