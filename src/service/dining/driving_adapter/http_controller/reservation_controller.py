from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.constant.route_constant import (
    RESERVATION_CREATE,
    RESERVATION_DELETE,
    RESERVATION_GET,
    RESERVATION_LIST,
    RESERVATION_MY,
    RESERVATION_UPDATE,
)
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.dining.app.command.delete_reservation_use_case import DeleteReservationUseCase
from src.service.dining.app.command.update_reservation_use_case import UpdateReservationUseCase
from src.service.dining.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.dining.app.query.list_reservations_use_case import ListReservationsUseCase
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.identity import Identity
from src.service.dining.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.dining.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationDateRequest,
    ReservationResponse,
    ResultResponse,
)
from src.service.dining.driving_adapter.http_controller.user_controller import get_acting_user


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get(RESERVATION_LIST, response_model=List[ReservationResponse])
@Logger.io
async def list_reservations(
    current_user: Identity = Depends(require_admin),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_all_reservations()
    return [ReservationResponse.model_validate(reservation) for reservation in reservations]


# Declared before RESERVATION_GET so '/reservation/user' is not taken as an id
@router.get(RESERVATION_MY, response_model=List[ReservationResponse])
@Logger.io
async def list_my_reservations(
    acting_user: UserEntity = Depends(get_acting_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_user_reservations(acting_user)
    return [ReservationResponse.model_validate(reservation) for reservation in reservations]


@router.get(RESERVATION_GET, response_model=ReservationResponse)
@Logger.io
async def get_reservation(
    reservation_id: str,
    current_user: Identity = Depends(require_admin),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.get_reservation(reservation_id)
    return ReservationResponse.model_validate(reservation)


@router.post(
    RESERVATION_CREATE, response_model=ReservationResponse, status_code=status.HTTP_201_CREATED
)
@Logger.io
async def create_reservation(
    restaurant_id: str,
    request: ReservationDateRequest,
    acting_user: UserEntity = Depends(get_acting_user),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.create_reservation') as span:
        span.set_attribute('restaurant_id', restaurant_id)

        reservation = await use_case.create_reservation(
            acting_user=acting_user, restaurant_id=restaurant_id, date=request.date
        )

        return ReservationResponse.model_validate(reservation)


@router.put(RESERVATION_UPDATE, response_model=ReservationResponse)
@Logger.io
async def update_reservation(
    reservation_id: str,
    request: ReservationDateRequest,
    acting_user: UserEntity = Depends(get_acting_user),
    use_case: UpdateReservationUseCase = Depends(UpdateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.update_reservation(
        acting_user=acting_user, reservation_id=reservation_id, date=request.date
    )
    return ReservationResponse.model_validate(reservation)


@router.delete(RESERVATION_DELETE, response_model=ResultResponse)
@Logger.io
async def delete_reservation(
    reservation_id: str,
    acting_user: UserEntity = Depends(get_acting_user),
    use_case: DeleteReservationUseCase = Depends(DeleteReservationUseCase.depends),
) -> ResultResponse:
    await use_case.delete_reservation(acting_user=acting_user, reservation_id=reservation_id)
    return ResultResponse(result='reservation deleted')
