from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReservationDateRequest(BaseModel):
    """Body of create and update; only the date is client supplied"""

    date: datetime

    model_config = ConfigDict(json_schema_extra={'example': {'date': '2025-01-10T19:30:00Z'}})

    @field_validator('date')
    @classmethod
    def assume_utc_when_naive(cls, value: datetime) -> datetime:
        # Wall-clock time is kept as sent; hours are checked against it
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReservationResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': '01936d8f-1111-7c4e-a9c5-123456789abc',
                'restaurant_id': '01936d8f-2222-7c4e-a9c5-123456789abc',
                'date': '2025-01-10T19:30:00Z',
                'updatedAt': '2025-01-09T08:00:00Z',
            }
        },
    )

    id: UUID
    user_id: UUID
    restaurant_id: UUID
    date: datetime
    updated_at: Optional[datetime] = Field(None, serialization_alias='updatedAt')


class ResultResponse(BaseModel):
    result: str
