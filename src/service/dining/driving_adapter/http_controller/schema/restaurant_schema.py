from datetime import datetime, time
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class FoodResponse(BaseModel):
    id: UUID
    name: str
    price: float

    model_config = ConfigDict(from_attributes=True)


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'name': 'Somtum Der',
                'category': 'thai',
                'address': '5/5 Saladaeng Rd, Bangkok',
                'phone_number': '021234567',
                'open_time': '09:00',
                'close_time': '22:00',
                'foods': [
                    {'id': '01936d8f-6a10-7f00-8000-0000000000aa', 'name': 'Som Tum', 'price': 120}
                ],
                'updatedAt': '2025-01-10T10:30:00Z',
            }
        },
    )

    id: UUID
    name: str
    category: str
    address: str
    phone_number: str
    open_time: time
    close_time: time
    foods: List[FoodResponse] = []
    updated_at: Optional[datetime] = Field(None, serialization_alias='updatedAt')

    @field_serializer('open_time', 'close_time')
    def serialize_time_of_day(self, value: time) -> str:
        return value.strftime('%H:%M')
