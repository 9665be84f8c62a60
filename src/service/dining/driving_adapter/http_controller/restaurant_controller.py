from typing import List

from fastapi import APIRouter, Depends

from src.platform.constant.route_constant import (
    FOOD_BY_RESTAURANT,
    FOOD_GET,
    RESTAURANT_BY_CATEGORY,
    RESTAURANT_GET,
    RESTAURANT_LIST,
)
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.query.restaurant_query_use_case import RestaurantQueryUseCase
from src.service.dining.domain.value_object.identity import Identity
from src.service.dining.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.dining.driving_adapter.http_controller.schema.restaurant_schema import (
    FoodResponse,
    RestaurantResponse,
)


router = APIRouter()


@router.get(RESTAURANT_LIST, response_model=List[RestaurantResponse])
@Logger.io
async def list_restaurants(
    current_user: Identity = Depends(get_current_user),
    use_case: RestaurantQueryUseCase = Depends(RestaurantQueryUseCase.depends),
) -> List[RestaurantResponse]:
    restaurants = await use_case.list_restaurants()
    return [RestaurantResponse.model_validate(restaurant) for restaurant in restaurants]


@router.get(RESTAURANT_BY_CATEGORY, response_model=List[RestaurantResponse])
@Logger.io
async def list_restaurants_by_category(
    category: str,
    current_user: Identity = Depends(get_current_user),
    use_case: RestaurantQueryUseCase = Depends(RestaurantQueryUseCase.depends),
) -> List[RestaurantResponse]:
    restaurants = await use_case.list_restaurants_by_category(category)
    return [RestaurantResponse.model_validate(restaurant) for restaurant in restaurants]


@router.get(RESTAURANT_GET, response_model=RestaurantResponse)
@Logger.io
async def get_restaurant(
    restaurant_id: str,
    current_user: Identity = Depends(require_admin),
    use_case: RestaurantQueryUseCase = Depends(RestaurantQueryUseCase.depends),
) -> RestaurantResponse:
    restaurant = await use_case.get_restaurant(restaurant_id)
    return RestaurantResponse.model_validate(restaurant)


@router.get(FOOD_BY_RESTAURANT, response_model=List[FoodResponse])
@Logger.io
async def list_foods(
    restaurant_id: str,
    current_user: Identity = Depends(get_current_user),
    use_case: RestaurantQueryUseCase = Depends(RestaurantQueryUseCase.depends),
) -> List[FoodResponse]:
    foods = await use_case.list_foods(restaurant_id)
    return [FoodResponse.model_validate(food) for food in foods]


@router.get(FOOD_GET, response_model=FoodResponse)
@Logger.io
async def get_food(
    restaurant_id: str,
    food_id: str,
    current_user: Identity = Depends(get_current_user),
    use_case: RestaurantQueryUseCase = Depends(RestaurantQueryUseCase.depends),
) -> FoodResponse:
    food = await use_case.get_food(restaurant_id, food_id)
    return FoodResponse.model_validate(food)
