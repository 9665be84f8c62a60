"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.dining.domain.entity.user_entity import UserRole


class SignUpRequest(BaseModel):
    """Sign-up request schema; role is always `user`"""

    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (bcrypt limit: 72 bytes)'
    )
    username: str = Field('', max_length=255)
    phone_number: str = Field('', max_length=32)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'email': 'user@example.com',
                'password': 'P@ssw0rd',
                'username': 'jane',
                'phone_number': '0812345678',
            }
        }
    )


class LoginRequest(BaseModel):
    """User login request schema"""

    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'user@example.com', 'password': 'P@ssw0rd'}}
    )


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """User response schema (never carries the password hash)"""

    id: UUID
    email: str
    username: str
    phone_number: str
    role: UserRole
    updated_at: Optional[datetime] = Field(None, serialization_alias='updatedAt')

    model_config = ConfigDict(from_attributes=True)
