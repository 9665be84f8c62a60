from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.dining.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.entity_id import parse_entity_id


class DeleteReservationUseCase:
    def __init__(
        self,
        *,
        reservation_query_repo: IReservationQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
    ) -> None:
        self.reservation_query_repo = reservation_query_repo
        self.reservation_command_repo = reservation_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
    ) -> Self:
        return cls(
            reservation_query_repo=reservation_query_repo,
            reservation_command_repo=reservation_command_repo,
        )

    @Logger.io
    async def delete_reservation(self, *, acting_user: UserEntity, reservation_id: str) -> None:
        parsed_id = parse_entity_id(reservation_id)
        reservation = (
            await self.reservation_query_repo.get_by_id(parsed_id) if parsed_id else None
        )
        if not reservation:
            raise NotFoundError('Reservation not found')

        reservation.ensure_accessible_by(user_id=acting_user.id, is_admin=acting_user.is_admin)

        await self.reservation_command_repo.delete(reservation=reservation)
