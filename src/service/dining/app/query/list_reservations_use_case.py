from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.domain.entity.user_entity import UserEntity


class ListReservationsUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo):
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_all_reservations(self) -> List[Reservation]:
        return await self.reservation_query_repo.list_all()

    @Logger.io
    async def list_user_reservations(self, acting_user: UserEntity) -> List[Reservation]:
        if acting_user.id is None:
            return []
        return await self.reservation_query_repo.list_by_user_id(acting_user.id)
