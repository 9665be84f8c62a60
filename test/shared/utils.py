from datetime import datetime, time, timedelta, timezone
from typing import Any

import jwt

from src.service.dining.domain.entity.restaurant_entity import Food, Restaurant
from src.service.dining.domain.value_object.entity_id import new_entity_id
from test.util_constant import TEST_SECRET_KEY


def build_restaurant(
    *,
    name: str = 'Somtum Der',
    category: str = 'thai',
    open_time: time = time(9, 0),
    close_time: time = time(22, 0),
) -> Restaurant:
    return Restaurant(
        id=new_entity_id(),
        name=name,
        category=category,
        address='5/5 Saladaeng Rd, Bangkok',
        phone_number='021234567',
        open_time=open_time,
        close_time=close_time,
        foods=[
            Food(id=new_entity_id(), name='Som Tum', price=120.0),
            Food(id=new_entity_id(), name='Sticky Rice', price=30.0),
        ],
    )


def auth_header(token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {token}'}


def sign_token(
    claims: dict[str, Any],
    *,
    expires_in: timedelta = timedelta(minutes=60),
    algorithm: str = 'HS256',
    secret: str = TEST_SECRET_KEY,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {'iat': now, 'exp': now + expires_in, **claims}
    return jwt.encode(payload, secret, algorithm=algorithm)


def at(hour: int, minute: int) -> datetime:
    return datetime(2025, 1, 10, hour, minute, tzinfo=timezone.utc)
