from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.dining.domain.entity.reservation_entity import Reservation


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def count_by_user_id(self, user_id: UUID) -> int:
        pass

    @abstractmethod
    async def get_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: UUID) -> List[Reservation]:
        pass
