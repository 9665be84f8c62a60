from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.domain.entity.reservation_entity import Reservation
from src.service.dining.domain.value_object.entity_id import parse_entity_id


class GetReservationUseCase:
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
    async def get_reservation(self, reservation_id: str) -> Reservation:
        parsed_id = parse_entity_id(reservation_id)
        reservation = (
            await self.reservation_query_repo.get_by_id(parsed_id) if parsed_id else None
        )

        if not reservation:
            raise NotFoundError('Reservation not found')

        return reservation
