from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.platform.metrics.reservation_metrics import reservation_metrics
from src.service.dining.domain.entity.user_entity import UserRole
from src.service.dining.domain.value_object.identity import Identity
from src.service.dining.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class RoleAuthStrategy:
    @staticmethod
    def has_role(identity: Identity, required_role: UserRole) -> bool:
        return identity.role == required_role


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    authorization: Optional[str] = Header(None, alias='Authorization'),
) -> Identity:
    """Verify the bearer token and attach {email, role}; no store lookup"""
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span('auth.authenticate_request'):
        try:
            return jwt_auth.authenticate_request(authorization)
        except AuthenticationError:
            reservation_metrics.record_auth_rejection(reason='unauthorized')
            raise


def authorize_role(identity: Identity, required_role: UserRole) -> Identity:
    if not RoleAuthStrategy.has_role(identity, required_role):
        reservation_metrics.record_auth_rejection(reason='forbidden')
        raise ForbiddenError(f'Only {required_role.value} can perform this action')
    return identity


async def require_admin(current_user: Identity = Depends(get_current_user)) -> Identity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.email': current_user.email,
            'user.role': current_user.role.value,
        },
    ):
        return authorize_role(current_user, UserRole.ADMIN)
