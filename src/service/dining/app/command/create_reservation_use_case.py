import time
from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    NotFoundError,
    OutsideOperatingHoursError,
    ReservationLimitExceededError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import reservation_metrics
from src.service.dining.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.app.interface.i_restaurant_query_repo import IRestaurantQueryRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.entity_id import parse_entity_id


class CreateReservationUseCase:
    """
    Booking workflow

    Checks run in a fixed order and the first failure wins:
    1. Restaurant exists (malformed or unknown id -> NotFoundError)
    2. User is below the reservation cap (-> ReservationLimitExceededError)
    3. Requested time of day is inside operating hours (-> OutsideOperatingHoursError)

    The cap is checked again by the store inside `create_if_under_limit`, so
    two concurrent requests that both pass step 2 cannot both be accepted.
    """

    def __init__(
        self,
        *,
        restaurant_query_repo: IRestaurantQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        max_reservations_per_user: int,
    ) -> None:
        self.restaurant_query_repo = restaurant_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.max_reservations_per_user = max_reservations_per_user
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        restaurant_query_repo: IRestaurantQueryRepo = Depends(
            Provide[Container.restaurant_query_repo]
        ),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            restaurant_query_repo=restaurant_query_repo,
            reservation_query_repo=reservation_query_repo,
            reservation_command_repo=reservation_command_repo,
            max_reservations_per_user=settings.MAX_RESERVATIONS_PER_USER,
        )

    @Logger.io
    async def create_reservation(
        self, *, acting_user: UserEntity, restaurant_id: str, date: datetime
    ) -> Reservation:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_reservation',
            attributes={'user.email': acting_user.email, 'restaurant.id': str(restaurant_id)},
        ) as span:
            try:
                reservation = await self._create(
                    acting_user=acting_user, restaurant_id=restaurant_id, date=date
                )
            except NotFoundError:
                self._record('not_found', started)
                raise
            except ReservationLimitExceededError:
                self._record('limit_exceeded', started)
                raise
            except OutsideOperatingHoursError:
                self._record('out_of_hours', started)
                raise
            except Exception:
                self._record('error', started)
                raise

            span.set_attribute('reservation.id', str(reservation.id))
            self._record('created', started)
            return reservation

    async def _create(
        self, *, acting_user: UserEntity, restaurant_id: str, date: datetime
    ) -> Reservation:
        # Step 1: restaurant existence
        parsed_restaurant_id = parse_entity_id(restaurant_id)
        restaurant = (
            await self.restaurant_query_repo.get_by_id(parsed_restaurant_id)
            if parsed_restaurant_id
            else None
        )
        if not restaurant:
            raise NotFoundError('Restaurant not found')

        if acting_user.id is None:
            raise NotFoundError('User not found')

        # Step 2: per-user cap
        current_count = await self.reservation_query_repo.count_by_user_id(acting_user.id)
        if current_count >= self.max_reservations_per_user:
            raise ReservationLimitExceededError(
                f'user already holds {current_count} reservations '
                f'(limit {self.max_reservations_per_user})'
            )

        # Step 3: operating hours on wall-clock minutes
        restaurant.validate_open_at(date)

        reservation = Reservation.create(
            user_id=acting_user.id, restaurant_id=restaurant.id, date=date
        )
        return await self.reservation_command_repo.create_if_under_limit(
            reservation=reservation, limit=self.max_reservations_per_user
        )

    @staticmethod
    def _record(result: str, started: float) -> None:
        reservation_metrics.record_reservation(
            result=result, duration=time.perf_counter() - started
        )
