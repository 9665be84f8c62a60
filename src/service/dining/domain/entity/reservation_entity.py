from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import ForbiddenError
from src.service.dining.domain.value_object.entity_id import new_entity_id


@attrs.define
class Reservation:
    id: UUID
    user_id: UUID
    restaurant_id: UUID
    date: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, user_id: UUID, restaurant_id: UUID, date: datetime) -> 'Reservation':
        return cls(
            id=new_entity_id(),
            user_id=user_id,
            restaurant_id=restaurant_id,
            date=date,
            updated_at=datetime.now(timezone.utc),
        )

    def is_owned_by(self, user_id: Optional[UUID]) -> bool:
        return user_id is not None and self.user_id == user_id

    def ensure_accessible_by(self, *, user_id: Optional[UUID], is_admin: bool) -> None:
        if not (is_admin or self.is_owned_by(user_id)):
            raise ForbiddenError('Only the owner or an admin can modify this reservation')

    def reschedule(self, *, date: datetime) -> 'Reservation':
        return attrs.evolve(self, date=date, updated_at=datetime.now(timezone.utc))
