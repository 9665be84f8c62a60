#!/usr/bin/env python3
"""
Database Seed Script
Populate the catalog and initial accounts

Features:
1. Create Users - one admin and one regular user
2. Create Restaurants - catalog rows with embedded menus

Notes:
- The API never writes the catalog; this script is the only way restaurants
  reach the store
- Run migrations first: alembic -c src/platform/alembic/alembic.ini upgrade head
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, time, timezone

from sqlalchemy import text

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database
from src.service.dining.domain.entity.restaurant_entity import Food
from src.service.dining.domain.entity.user_entity import UserEntity, UserRole
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.model.restaurant_model import RestaurantModel
from src.service.dining.driven_adapter.repo.restaurant_query_repo_impl import food_to_document
from src.service.dining.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.dining.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class UserConfig:
    """User seed configuration"""
    email: str
    username: str
    role: UserRole


@dataclass
class RestaurantConfig:
    """Restaurant seed configuration"""
    name: str
    category: str
    address: str
    phone_number: str
    open_time: time
    close_time: time
    foods: list[tuple[str, float]] = field(default_factory=list)


SEED_USERS = [
    UserConfig(email='admin@r.com', username='init admin', role=UserRole.ADMIN),
    UserConfig(email='user@r.com', username='init user', role=UserRole.USER),
]

SEED_RESTAURANTS = [
    RestaurantConfig(
        name='Somtum Der',
        category='thai',
        address='5/5 Saladaeng Rd, Bangkok',
        phone_number='021234567',
        open_time=time(9, 0),
        close_time=time(22, 0),
        foods=[('Som Tum', 120.0), ('Larb Moo', 150.0), ('Sticky Rice', 30.0)],
    ),
    RestaurantConfig(
        name='Sushi Masa',
        category='japanese',
        address='88 Sukhumvit 31, Bangkok',
        phone_number='022345678',
        open_time=time(11, 30),
        close_time=time(21, 30),
        foods=[('Omakase Set', 2500.0), ('Salmon Nigiri', 180.0)],
    ),
    RestaurantConfig(
        name='Trattoria Roma',
        category='italian',
        address='12 Convent Rd, Bangkok',
        phone_number='023456789',
        open_time=time(17, 0),
        close_time=time(23, 0),
        foods=[('Carbonara', 320.0), ('Margherita', 290.0), ('Tiramisu', 180.0)],
    ),
]


async def create_users(database: Database) -> None:
    print(f'👥 Creating {len(SEED_USERS)} users...')

    user_repo = UserCommandRepoImpl(session_factory=database.session, settings=settings)
    password_hasher = BcryptPasswordHasher()

    for config in SEED_USERS:
        user = UserEntity(email=config.email, username=config.username, role=config.role)
        user.set_password(DEFAULT_PASSWORD, password_hasher)
        created_user = await user_repo.create(user)
        print(f'   ✅ Created {config.role.value}: {created_user.email} ({created_user.id})')

    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')


async def create_restaurants(database: Database) -> None:
    print(f'🍽️  Creating {len(SEED_RESTAURANTS)} restaurants...')

    async with database.session() as session:
        async with session.begin():
            for config in SEED_RESTAURANTS:
                foods = [
                    Food(id=new_entity_id(), name=name, price=price)
                    for name, price in config.foods
                ]
                restaurant = RestaurantModel(
                    id=new_entity_id(),
                    name=config.name,
                    category=config.category,
                    address=config.address,
                    phone_number=config.phone_number,
                    open_time=config.open_time,
                    close_time=config.close_time,
                    foods=[food_to_document(food) for food in foods],
                    updated_at=datetime.now(timezone.utc),
                )
                session.add(restaurant)
                print(f'   ✅ Created restaurant: {config.name} ({len(foods)} foods)')


async def verify_data(database: Database) -> None:
    print('🔍 Verifying seeded data...')

    async with database.session() as session:
        for table in ['user', 'restaurant', 'reservation']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM "{table}"'))
            print(f'   {table.capitalize()} count: {result.scalar()}')

    print('   ✅ Data verification completed!')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = Database(settings=settings)
    try:
        await create_users(database)
        print()
        await create_restaurants(database)
        print()
        await verify_data(database)

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        for user in SEED_USERS:
            print(f'   {user.role.value}: {user.email} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
