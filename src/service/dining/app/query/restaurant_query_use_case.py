"""
Catalog browsing (read only)
"""

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_restaurant_query_repo import IRestaurantQueryRepo
from src.service.dining.domain.entity.restaurant_entity import Food, Restaurant
from src.service.dining.domain.value_object.entity_id import parse_entity_id


class RestaurantQueryUseCase:
    def __init__(self, restaurant_query_repo: IRestaurantQueryRepo):
        self.restaurant_query_repo = restaurant_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        restaurant_query_repo: IRestaurantQueryRepo = Depends(
            Provide[Container.restaurant_query_repo]
        ),
    ) -> Self:
        return cls(restaurant_query_repo=restaurant_query_repo)

    @Logger.io
    async def list_restaurants(self) -> List[Restaurant]:
        return await self.restaurant_query_repo.list_all()

    @Logger.io
    async def list_restaurants_by_category(self, category: str) -> List[Restaurant]:
        return await self.restaurant_query_repo.list_by_category(category)

    @Logger.io
    async def get_restaurant(self, restaurant_id: str) -> Restaurant:
        parsed_id = parse_entity_id(restaurant_id)
        restaurant = await self.restaurant_query_repo.get_by_id(parsed_id) if parsed_id else None

        if not restaurant:
            raise NotFoundError('Restaurant not found')

        return restaurant

    @Logger.io
    async def list_foods(self, restaurant_id: str) -> List[Food]:
        restaurant = await self.get_restaurant(restaurant_id)
        return list(restaurant.foods)

    @Logger.io
    async def get_food(self, restaurant_id: str, food_id: str) -> Food:
        restaurant = await self.get_restaurant(restaurant_id)
        parsed_food_id = parse_entity_id(food_id)
        food = restaurant.find_food(parsed_food_id) if parsed_food_id else None

        if not food:
            raise NotFoundError('Food not found')

        return food
