from typing import List, Optional
from uuid import UUID

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_restaurant_query_repo import IRestaurantQueryRepo
from src.service.dining.domain.entity.restaurant_entity import Restaurant
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore


class RestaurantQueryRepoInMemoryImpl(IRestaurantQueryRepo):
    def __init__(self, store: InMemoryDataStore, settings: Settings) -> None:
        self.store = store
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def get_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        async with store_call('restaurant.get_by_id', timeout_seconds=self.timeout):
            return self.store.restaurants.get(restaurant_id)

    @Logger.io
    async def list_all(self) -> List[Restaurant]:
        async with store_call('restaurant.list_all', timeout_seconds=self.timeout):
            return sorted(self.store.restaurants.values(), key=lambda r: r.id)

    @Logger.io
    async def list_by_category(self, category: str) -> List[Restaurant]:
        async with store_call('restaurant.list_by_category', timeout_seconds=self.timeout):
            return sorted(
                (r for r in self.store.restaurants.values() if r.category == category),
                key=lambda r: r.id,
            )
