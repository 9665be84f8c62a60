"""
Process-local backing store for STORE_BACKEND=memory

Holds users, restaurants and reservations in dicts and hands out one lock
per user so the reservation cap check and insert run as a single step.
Used for local runs and the test suite; data is lost on restart.
"""

from typing import Dict, Iterable
from uuid import UUID

import anyio

from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.domain.entity.restaurant_entity import Restaurant
from src.service.dining.domain.entity.user_entity import UserEntity


class InMemoryDataStore:
    def __init__(self) -> None:
        self.users_by_email: Dict[str, UserEntity] = {}
        self.restaurants: Dict[UUID, Restaurant] = {}
        self.reservations: Dict[UUID, Reservation] = {}
        self._user_locks: Dict[UUID, anyio.Lock] = {}

    def user_lock(self, user_id: UUID) -> anyio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = self._user_locks[user_id] = anyio.Lock()
        return lock

    def seed_restaurants(self, restaurants: Iterable[Restaurant]) -> None:
        for restaurant in restaurants:
            self.restaurants[restaurant.id] = restaurant

    def clear(self) -> None:
        self.users_by_email.clear()
        self.restaurants.clear()
        self.reservations.clear()
        self._user_locks.clear()
