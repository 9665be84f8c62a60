from abc import ABC, abstractmethod

from src.service.dining.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    """
    Reservation store - write side

    Implementations own the concurrency control for the per-user cap: the
    count and the insert in `create_if_under_limit` happen under one
    per-user serialization point, so concurrent bookings cannot overshoot.
    """

    @abstractmethod
    async def create_if_under_limit(self, *, reservation: Reservation, limit: int) -> Reservation:
        """
        Insert the reservation only if its owner holds fewer than `limit`

        Raises:
            ReservationLimitExceededError: If the owner already holds `limit` or more
        """
        pass

    @abstractmethod
    async def update(self, *, reservation: Reservation) -> Reservation:
        """
        Raises:
            NotFoundError: If the reservation no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, *, reservation: Reservation) -> None:
        """
        Raises:
            NotFoundError: If the reservation no longer exists
        """
        pass
