import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError
from src.service.dining.app.query.restaurant_query_use_case import RestaurantQueryUseCase
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore
from src.service.dining.driven_adapter.repo.restaurant_query_repo_in_memory_impl import (
    RestaurantQueryRepoInMemoryImpl,
)
from test.shared.utils import build_restaurant


@pytest.mark.unit
class TestRestaurantQueryUseCase:
    @pytest.fixture
    def thai(self):
        return build_restaurant(name='Somtum Der', category='thai')

    @pytest.fixture
    def italian(self):
        return build_restaurant(name='Trattoria Roma', category='italian')

    @pytest.fixture
    def use_case(self, thai, italian):
        store = InMemoryDataStore()
        store.seed_restaurants([thai, italian])
        return RestaurantQueryUseCase(
            restaurant_query_repo=RestaurantQueryRepoInMemoryImpl(store, settings)
        )

    @pytest.mark.asyncio
    async def test_get_restaurant_is_idempotent(self, use_case, thai):
        first = await use_case.get_restaurant(str(thai.id))
        second = await use_case.get_restaurant(str(thai.id))

        assert first == second == thai

    @pytest.mark.asyncio
    async def test_list_restaurants(self, use_case, thai, italian):
        restaurants = await use_case.list_restaurants()

        assert {r.id for r in restaurants} == {thai.id, italian.id}

    @pytest.mark.asyncio
    async def test_list_by_category_filters_exactly(self, use_case, italian):
        assert await use_case.list_restaurants_by_category('italian') == [italian]
        assert await use_case.list_restaurants_by_category('Italian') == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('restaurant_id', ['nope', str(new_entity_id())])
    async def test_unknown_or_malformed_restaurant(self, use_case, restaurant_id):
        with pytest.raises(NotFoundError):
            await use_case.get_restaurant(restaurant_id)

    @pytest.mark.asyncio
    async def test_foods_keep_menu_order(self, use_case, thai):
        foods = await use_case.list_foods(str(thai.id))

        assert [f.name for f in foods] == ['Som Tum', 'Sticky Rice']

    @pytest.mark.asyncio
    async def test_get_food(self, use_case, thai):
        food = thai.foods[1]

        assert await use_case.get_food(str(thai.id), str(food.id)) == food

        with pytest.raises(NotFoundError):
            await use_case.get_food(str(thai.id), str(new_entity_id()))
