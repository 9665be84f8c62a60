"""
Unit tests for the in-memory reservation store

The conditional insert must hold the per-user cap under concurrency: a user
holding 2 reservations who fires N creates at once ends with exactly 3.
"""

import asyncio
from datetime import datetime, timezone

import anyio
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError, ReservationLimitExceededError
from src.service.dining.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore
from src.service.dining.driven_adapter.repo.reservation_repo_in_memory_impl import (
    ReservationCommandRepoInMemoryImpl,
    ReservationQueryRepoInMemoryImpl,
)
from src.service.dining.driven_adapter.repo.restaurant_query_repo_in_memory_impl import (
    RestaurantQueryRepoInMemoryImpl,
)
from test.shared.utils import at, build_restaurant


class YieldingCommandRepo(ReservationCommandRepoInMemoryImpl):
    """Hands control back to the event loop between the count and the insert"""

    async def _held_count(self, user_id):
        count = await super()._held_count(user_id)
        await anyio.sleep(0)
        return count


class LocklessStore(InMemoryDataStore):
    def user_lock(self, user_id):
        return anyio.Lock()


@pytest.mark.unit
class TestReservationRepoInMemory:
    @pytest.fixture
    def store(self):
        return InMemoryDataStore()

    @pytest.fixture
    def query_repo(self, store):
        return ReservationQueryRepoInMemoryImpl(store, settings)

    @pytest.fixture
    def command_repo(self, store):
        return ReservationCommandRepoInMemoryImpl(store, settings)

    @pytest.fixture
    def user_id(self):
        return new_entity_id()

    def _reservation(self, user_id, hour: int = 19) -> Reservation:
        return Reservation.create(
            user_id=user_id,
            restaurant_id=new_entity_id(),
            date=datetime(2025, 1, 10, hour, 0, tzinfo=timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, query_repo, command_repo, user_id):
        created = await command_repo.create_if_under_limit(
            reservation=self._reservation(user_id), limit=3
        )

        fetched = await query_repo.get_by_id(created.id)

        assert fetched == created
        assert await query_repo.count_by_user_id(user_id) == 1
        assert await query_repo.list_by_user_id(user_id) == [created]

    @pytest.mark.asyncio
    async def test_conditional_insert_rejects_at_limit(self, query_repo, command_repo, user_id):
        for hour in (18, 19, 20):
            await command_repo.create_if_under_limit(
                reservation=self._reservation(user_id, hour), limit=3
            )

        with pytest.raises(ReservationLimitExceededError):
            await command_repo.create_if_under_limit(
                reservation=self._reservation(user_id), limit=3
            )

        assert await query_repo.count_by_user_id(user_id) == 3

    @pytest.mark.asyncio
    async def test_limit_is_per_user(self, query_repo, command_repo, user_id):
        for hour in (18, 19, 20):
            await command_repo.create_if_under_limit(
                reservation=self._reservation(user_id, hour), limit=3
            )

        other_user_id = new_entity_id()
        await command_repo.create_if_under_limit(
            reservation=self._reservation(other_user_id), limit=3
        )

        assert await query_repo.count_by_user_id(other_user_id) == 1
        assert len(await query_repo.list_all()) == 4

    @pytest.mark.asyncio
    async def test_update_and_delete_missing_are_not_found(self, command_repo, user_id):
        ghost = self._reservation(user_id)

        with pytest.raises(NotFoundError):
            await command_repo.update(reservation=ghost)
        with pytest.raises(NotFoundError):
            await command_repo.delete(reservation=ghost)

    async def _race_creates(self, command_repo, user_id, attempts: int = 8) -> list:
        for hour in (18, 20):
            await command_repo.create_if_under_limit(
                reservation=self._reservation(user_id, hour), limit=3
            )
        return await asyncio.gather(
            *(
                command_repo.create_if_under_limit(reservation=self._reservation(user_id), limit=3)
                for _ in range(attempts)
            ),
            return_exceptions=True,
        )

    @pytest.mark.asyncio
    async def test_concurrent_creates_never_exceed_cap(self, store, query_repo, user_id):
        """
        Given: a user holding 2 reservations and a store that yields between count and insert
        When: 8 creates run concurrently
        Then: the user lock serializes them, one is accepted and the user ends with 3
        """
        results = await self._race_creates(YieldingCommandRepo(store, settings), user_id)

        accepted = [r for r in results if isinstance(r, Reservation)]
        rejected = [r for r in results if isinstance(r, ReservationLimitExceededError)]
        assert len(accepted) == 1
        assert len(rejected) == 7
        assert await query_repo.count_by_user_id(user_id) == 3

    @pytest.mark.asyncio
    async def test_without_user_lock_concurrent_creates_overshoot_cap(self, user_id):
        """
        Given: the same race against a store whose lock serializes nothing
        When: 8 creates run concurrently
        Then: several creates see 2 held and the cap is broken
        """
        store = LocklessStore()
        await self._race_creates(YieldingCommandRepo(store, settings), user_id)

        query_repo = ReservationQueryRepoInMemoryImpl(store, settings)
        assert await query_repo.count_by_user_id(user_id) > 3

    @pytest.mark.asyncio
    async def test_concurrent_workflow_creates_never_exceed_cap(self, store, query_repo):
        """
        Given: a user already holding 2 reservations
        When: 8 create requests run concurrently through the full workflow
        Then: exactly one is accepted and the user ends with 3
        """
        restaurant = build_restaurant()
        store.seed_restaurants([restaurant])
        acting_user = UserEntity(id=new_entity_id(), email='racer@test.com')
        command_repo = YieldingCommandRepo(store, settings)
        for hour in (18, 20):
            await command_repo.create_if_under_limit(
                reservation=self._reservation(acting_user.id, hour), limit=3
            )

        use_case = CreateReservationUseCase(
            restaurant_query_repo=RestaurantQueryRepoInMemoryImpl(store, settings),
            reservation_query_repo=query_repo,
            reservation_command_repo=command_repo,
            max_reservations_per_user=3,
        )

        results = await asyncio.gather(
            *(
                use_case.create_reservation(
                    acting_user=acting_user, restaurant_id=str(restaurant.id), date=at(19, 0)
                )
                for _ in range(8)
            ),
            return_exceptions=True,
        )

        accepted = [r for r in results if isinstance(r, Reservation)]
        rejected = [r for r in results if isinstance(r, ReservationLimitExceededError)]
        assert len(accepted) == 1
        assert len(rejected) == 7
        assert await query_repo.count_by_user_id(acting_user.id) == 3
