from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.constant.route_constant import AUTHEN_LOGIN, AUTHEN_SIGNUP, USER_ME
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.dining.app.query.user_query_use_case import UserUseCase
from src.service.dining.domain.entity.user_entity import UserEntity
from src.service.dining.domain.value_object.identity import Identity
from src.service.dining.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.dining.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.dining.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    SignUpRequest,
    TokenResponse,
    UserResponse,
)


# === API Router ===

router = APIRouter()


async def get_acting_user(
    current_user: Identity = Depends(get_current_user),
    use_case: UserUseCase = Depends(UserUseCase.depends),
) -> UserEntity:
    """Resolve the token identity to the stored user (unknown email -> 404)"""
    return await use_case.get_user_by_email(current_user.email)


@router.post(AUTHEN_SIGNUP, response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def sign_up(
    request: SignUpRequest,
    use_case: UserUseCase = Depends(UserUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    user_entity = await use_case.sign_up(
        email=request.email,
        password=request.password.get_secret_value(),
        username=request.username,
        phone_number=request.phone_number,
    )

    return TokenResponse(token=jwt_auth.create_jwt_token(user_entity))


@router.post(AUTHEN_LOGIN, response_model=TokenResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    return TokenResponse(token=jwt_auth.create_jwt_token(user_entity))


@router.get(USER_ME, response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_acting_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
