from typing import AsyncContextManager, Callable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import Settings
from src.platform.database.store_call import store_call
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.driven_adapter.model.reservation_model import ReservationModel


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        settings: Settings,
    ) -> None:
        self.session_factory = session_factory
        self.timeout = settings.STORE_CALL_TIMEOUT_SECONDS

    @Logger.io
    async def count_by_user_id(self, user_id: UUID) -> int:
        async with store_call('reservation.count_by_user_id', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(func.count())
                    .select_from(ReservationModel)
                    .where(ReservationModel.user_id == user_id)
                )
                return int(result.scalar_one())

    @Logger.io
    async def get_by_id(self, reservation_id: UUID) -> Optional[Reservation]:
        async with store_call('reservation.get_by_id', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                reservation_model = await session.get(ReservationModel, reservation_id)

        return model_to_entity(reservation_model) if reservation_model else None

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        async with store_call('reservation.list_all', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ReservationModel).order_by(ReservationModel.id)
                )
                reservation_models = result.scalars().all()

        return [model_to_entity(model) for model in reservation_models]

    @Logger.io
    async def list_by_user_id(self, user_id: UUID) -> List[Reservation]:
        async with store_call('reservation.list_by_user_id', timeout_seconds=self.timeout):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(ReservationModel)
                    .where(ReservationModel.user_id == user_id)
                    .order_by(ReservationModel.id)
                )
                reservation_models = result.scalars().all()

        return [model_to_entity(model) for model in reservation_models]


def model_to_entity(reservation_model: ReservationModel) -> Reservation:
    return Reservation(
        id=reservation_model.id,
        user_id=reservation_model.user_id,
        restaurant_id=reservation_model.restaurant_id,
        date=reservation_model.date,
        updated_at=reservation_model.updated_at,
    )
