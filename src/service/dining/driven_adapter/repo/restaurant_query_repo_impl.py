from typing import Any, AsyncContextManager, Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_restaurant_query_repo import IRestaurantQueryRepo
from src.service.dining.domain.entity.restaurant_entity import Food, Restaurant
from src.service.dining.driven_adapter.model.restaurant_model import RestaurantModel


class RestaurantQueryRepoImpl(IRestaurantQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        settings: Settings,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def get_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        async with store_call('restaurant.get_by_id', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(RestaurantModel).where(RestaurantModel.id == restaurant_id)
                )
                restaurant_model = result.scalar_one_or_none()

        return _model_to_entity(restaurant_model) if restaurant_model else None

    @Logger.io
    async def list_all(self) -> List[Restaurant]:
        async with store_call('restaurant.list_all', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(RestaurantModel).order_by(RestaurantModel.id)
                )
                restaurant_models = result.scalars().all()

        return [_model_to_entity(model) for model in restaurant_models]

    @Logger.io
    async def list_by_category(self, category: str) -> List[Restaurant]:
        async with store_call('restaurant.list_by_category', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(RestaurantModel)
                    .where(RestaurantModel.category == category)
                    .order_by(RestaurantModel.id)
                )
                restaurant_models = result.scalars().all()

        return [_model_to_entity(model) for model in restaurant_models]


def food_to_document(food: Food) -> dict[str, Any]:
    return {'id': str(food.id), 'name': food.name, 'price': food.price}


def _document_to_food(document: dict[str, Any]) -> Food:
    return Food(id=UUID(document['id']), name=document['name'], price=float(document['price']))


def _model_to_entity(restaurant_model: RestaurantModel) -> Restaurant:
    return Restaurant(
        id=restaurant_model.id,
        name=restaurant_model.name,
        category=restaurant_model.category,
        address=restaurant_model.address,
        phone_number=restaurant_model.phone_number,
        open_time=restaurant_model.open_time,
        close_time=restaurant_model.close_time,
        foods=[_document_to_food(document) for document in restaurant_model.foods or []],
        updated_at=restaurant_model.updated_at,
    )
