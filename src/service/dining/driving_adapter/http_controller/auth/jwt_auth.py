"""
Bearer token issuance and verification (Authorization Gate)
"""

from datetime import datetime, timedelta, timezone
from functools import cached_property
import secrets
from typing import Any, Dict, Optional

import jwt
from pydantic import SecretStr

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import AuthenticationError, LoginError
from src.platform.logging.loguru_io import Logger
from src.service.dining.app.interface.i_password_hasher import IPasswordHasher
from src.service.dining.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.dining.domain.entity.user_entity import UserEntity, UserRole
from src.service.dining.domain.value_object.identity import Identity


BEARER_PREFIX = 'Bearer '


class JwtAuth:
    def __init__(self, *, settings: Settings, password_hasher: IPasswordHasher) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.password_hasher = password_hasher

    @cached_property
    def _decoy_hash(self) -> str:
        # Checked against when the email is unknown so both login failures cost one bcrypt verify
        return self.password_hasher.hash_password(
            plain_password=SecretStr(secrets.token_urlsafe(16))
        )

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'email': user_entity.email,
            'role': user_entity.role.value,
            'exp': now + timedelta(minutes=self.token_expire_minutes),
            'iat': now,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            # Pinning `algorithms` rejects tokens signed with anything but HS256
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={'require': ['exp']},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('Token expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def authenticate_request(self, raw_header: Optional[str]) -> Identity:
        """
        Verify the Authorization header and return the caller identity

        A leading "Bearer " is stripped when present; otherwise the header
        value is verified as the token itself.

        Raises:
            AuthenticationError: missing header, bad signature, expired token,
                foreign algorithm, or missing / malformed email and role claims
        """
        if not raw_header:
            raise AuthenticationError('Not authenticated')

        token = raw_header
        if raw_header.startswith(BEARER_PREFIX):
            token = raw_header[len(BEARER_PREFIX) :]
        payload = self.decode_jwt_token(token)

        email = payload.get('email')
        role = payload.get('role')
        if not isinstance(email, str) or not email or not isinstance(role, str):
            raise AuthenticationError('Invalid token')

        try:
            user_role = UserRole(role)
        except ValueError as e:
            raise AuthenticationError('Invalid token') from e

        return Identity(email=email, role=user_role)

    @Logger.io
    async def authenticate_user(
        self, *, user_query_repo: IUserQueryRepo, email: str, password: str
    ) -> UserEntity:
        user_entity = await user_query_repo.get_by_email(email)
        hashed_password = user_entity.hashed_password if user_entity else self._decoy_hash

        password_matches = self.password_hasher.verify_password(
            plain_password=SecretStr(password), hashed_password=hashed_password
        )
        if not user_entity or not password_matches:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity
