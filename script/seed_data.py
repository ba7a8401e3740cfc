#!/usr/bin/env python3
"""
Database Seed Script
Populate initial data into the database

Features:
1. Create schema if missing
2. Seed the default table catalog (skipped when tables already exist)
3. Create one test user per role (skipped when the email already exists)

Usage: python -m script.seed_data
"""

import asyncio
from dataclasses import dataclass

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import (
    Database,
    create_db_and_tables,
    dispose_engine,
)
from src.service.table_reservation.app.command.seed_tables_use_case import SeedTablesUseCase
from src.service.table_reservation.domain.entity.user_entity import UserEntity, UserRole
from src.service.table_reservation.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.table_reservation.driven_adapter.model.table_model import TableModel
from src.service.table_reservation.driven_adapter.model.user_model import UserModel
from src.service.table_reservation.driven_adapter.repo.table_command_repo_impl import (
    TableCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.table_query_repo_impl import (
    TableQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.table_reservation.driven_adapter.repo.user_query_repo_impl import (
    UserQueryRepoImpl,
)
from src.service.table_reservation.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class UserConfig:
    """User seed configuration"""
    email: str
    name: str
    role: UserRole


# Test users to create
TEST_USERS = [
    UserConfig(email='c@t.com', name='init customer', role=UserRole.CUSTOMER),
    UserConfig(email='s@t.com', name='init staff', role=UserRole.STAFF),
    UserConfig(email='m@t.com', name='init manager', role=UserRole.MANAGER),
    UserConfig(email='a@t.com', name='init admin', role=UserRole.ADMIN),
]


async def seed_tables(database: Database) -> None:
    print('🪑 Seeding table catalog...')
    use_case = SeedTablesUseCase(
        table_query_repo=TableQueryRepoImpl(database.session),
        table_command_repo=TableCommandRepoImpl(database.session),
    )
    created = await use_case.seed()
    if not created:
        print('   ⏭️  Catalog already seeded')
    for table in created:
        print(f'   ✅ Created {table.name}: ID={table.id}, capacity={table.capacity}')


async def create_users(database: Database) -> None:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    user_query_repo = UserQueryRepoImpl(database.session)
    user_command_repo = UserCommandRepoImpl(database.session)
    password_hasher = BcryptPasswordHasher()

    for config in TEST_USERS:
        if await user_query_repo.exists_by_email(config.email):
            print(f'   ⏭️  {config.email} already exists')
            continue

        user = UserEntity(email=config.email, name=config.name, role=config.role)
        user.set_password(DEFAULT_PASSWORD, password_hasher)
        created_user = await user_command_repo.create(user)
        print(f'   ✅ Created {config.role.value}: ID={created_user.id}, Email={created_user.email}')


async def verify_data(database: Database) -> None:
    print('🔍 Verifying seeded data...')
    async with database.session() as session:
        for label, model in (('Table', TableModel), ('User', UserModel), ('Reservation', ReservationModel)):
            count = (await session.execute(select(func.count()).select_from(model))).scalar_one()
            print(f'   {label} count: {count}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = Database()
    try:
        await create_db_and_tables()
        await seed_tables(database)
        print()
        await create_users(database)
        print()
        await verify_data(database)

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        for user in TEST_USERS:
            print(f'   {user.role.value.capitalize()}: {user.email} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1)

    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
