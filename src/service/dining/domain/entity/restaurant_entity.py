from datetime import datetime, time
from typing import List, Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import OutsideOperatingHoursError
from src.service.dining.domain.opening_hours import is_within_operating_hours


@attrs.define(frozen=True)
class Food:
    id: UUID
    name: str
    price: float


@attrs.define
class Restaurant:
    id: UUID
    name: str
    open_time: time
    close_time: time
    category: str = ''
    address: str = ''
    phone_number: str = ''
    foods: List[Food] = attrs.field(factory=list)
    updated_at: Optional[datetime] = None

    def find_food(self, food_id: UUID) -> Optional[Food]:
        return next((food for food in self.foods if food.id == food_id), None)

    def validate_open_at(self, requested: datetime) -> None:
        if not is_within_operating_hours(
            requested=requested, open_time=self.open_time, close_time=self.close_time
        ):
            raise OutsideOperatingHoursError(
                "reservation time is outside of the restaurant's operating hours "
                f'({self.open_time:%H:%M}-{self.close_time:%H:%M})'
            )
