from typing import List, Optional
from uuid import UUID

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.exception.exceptions import NotFoundError, ReservationLimitExceededError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore


class ReservationQueryRepoInMemoryImpl(IReservationQueryRepo):
    def __init__(self, store: InMemoryDataStore, settings: Settings) -> None:
        self.store = store
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def count_by_user_id(self, user_id: UUID) -> int:
        async with store_call('reservation.count_by_user_id', timeout_seconds=self.timeout):
            return _count_for_user(self.store, user_id)

    @Logger.io
    async def get_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        async with store_call('reservation.get_by_id', timeout_seconds=self.timeout):
            return self.store.reservations.get(reservation_id)

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        async with store_call('reservation.list_all', timeout_seconds=self.timeout):
            return sorted(self.store.reservations.values(), key=lambda r: r.id)

    @Logger.io
    async def list_by_user_id(self, user_id: UUID) -> List[Reservation]:
        async with store_call('reservation.list_by_user_id', timeout_seconds=self.timeout):
            return sorted(
                (r for r in self.store.reservations.values() if r.user_id == user_id),
                key=lambda r: r.id,
            )


class ReservationCommandRepoInMemoryImpl(IReservationCommandRepo):
    def __init__(self, store: InMemoryDataStore, settings: Settings) -> None:
        self.store = store
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def create_if_under_limit(self, *, reservation: Reservation, limit: int) -> Reservation:
        async with store_call('reservation.create', timeout_seconds=self.timeout):
            async with self.store.user_lock(reservation.user_id):
                current_count = await self._held_count(reservation.user_id)
                if current_count >= limit:
                    raise ReservationLimitExceededError(
                        f'user already holds {current_count} reservations (limit {limit})'
                    )
                self.store.reservations[reservation.id] = reservation

        Logger.base.info(
            f'📝 [RESERVATION] Created {reservation.id} for user {reservation.user_id} '
            f'({current_count + 1}/{limit})'
        )
        return reservation

    async def _held_count(self, user_id: UUID) -> int:
        # Awaited inside the user lock; a yield here must not let a second create slip in
        return _count_for_user(self.store, user_id)

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        async with store_call('reservation.update', timeout_seconds=self.timeout):
            if reservation.id not in self.store.reservations:
                raise NotFoundError('Reservation not found')
            self.store.reservations[reservation.id] = reservation
        return reservation

    @Logger.io
    async def delete(self, *, reservation: Reservation) -> None:
        async with store_call('reservation.delete', timeout_seconds=self.timeout):
            if self.store.reservations.pop(reservation.id, None) is None:
                raise NotFoundError('Reservation not found')


def _count_for_user(store: InMemoryDataStore, user_id: UUID) -> int:
    return sum(1 for r in store.reservations.values() if r.user_id == user_id)
