from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.dining.domain.entity.restaurant_entity import Restaurant


class IRestaurantQueryRepo(ABC):
    """Catalog store - read only from this service"""

    @abstractmethod
    async def get_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Restaurant]:
        pass

    @abstractmethod
    async def list_by_category(self, category: str) -> List[Restaurant]:
        pass
