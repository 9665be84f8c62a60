from typing import AsyncContextManager, Callable

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.exception.exceptions import NotFoundError, ReservationLimitExceededError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.driven_adapter.model.reservation_model import ReservationModel
from src.service.dining.driven_adapter.repo.reservation_query_repo_impl import model_to_entity


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        settings: Settings,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def create_if_under_limit(self, *, reservation: Reservation, limit: int) -> Reservation:
        async with store_call('reservation.create', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                async with session.begin():
                    # Serializes bookings of the same user until the transaction ends
                    await session.execute(
                        text('SELECT pg_advisory_xact_lock(hashtext(:user_id))'),
                        {'user_id': str(reservation.user_id)},
                    )
                    result = await session.execute(
                        select(func.count())
                        .select_from(ReservationModel)
                        .where(ReservationModel.user_id == reservation.user_id)
                    )
                    current_count = int(result.scalar_one())
                    if current_count >= limit:
                        raise ReservationLimitExceededError(
                            f'user already holds {current_count} reservations (limit {limit})'
                        )

                    reservation_model = ReservationModel(
                        id=reservation.id,
                        user_id=reservation.user_id,
                        restaurant_id=reservation.restaurant_id,
                        date=reservation.date,
                        updated_at=reservation.updated_at,
                    )
                    session.add(reservation_model)

        Logger.base.info(
            f'📝 [RESERVATION] Created {reservation.id} for user {reservation.user_id} '
            f'({current_count + 1}/{limit})'
        )
        return model_to_entity(reservation_model)

    @Logger.io
    async def update(self, *, reservation: Reservation) -> Reservation:
        async with store_call('reservation.update', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                async with session.begin():
                    reservation_model = await session.get(ReservationModel, reservation.id)
                    if not reservation_model:
                        raise NotFoundError('Reservation not found')

                    reservation_model.date = reservation.date
                    reservation_model.updated_at = reservation.updated_at

        return model_to_entity(reservation_model)

    @Logger.io
    async def delete(self, *, reservation: Reservation) -> None:
        async with store_call('reservation.delete', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                async with session.begin():
                    reservation_model = await session.get(ReservationModel, reservation.id)
                    if not reservation_model:
                        raise NotFoundError('Reservation not found')

                    await session.delete(reservation_model)
