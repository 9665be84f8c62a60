from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

import attrs
from pydantic import SecretStr

from src.service.dining.app.interface.i_password_hasher import IPasswordHasher


class UserRole(str, Enum):
    USER = 'user'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str = ''
    username: str = ''
    phone_number: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[UUID] = None
    role: UserRole = UserRole.USER
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
