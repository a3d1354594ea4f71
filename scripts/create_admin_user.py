"""Create an admin user.

Usage:
    python -m scripts.create_admin_user --email admin@example.com --name Admin --password 'S3cret!'

Creates the tables first if they do not exist.
"""

import argparse
import asyncio
import sys

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.users import RegisterUserCommand, RegisterUserUseCase
from src.domain.entities import UserRole


async def create_admin_user(email: str, name: str, password: str, db_uri: str) -> bool:
    """Returns False if a user with that email already exists."""
    engine = create_async_engine(db_uri, echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_factory() as session:
            use_case = RegisterUserUseCase(SqlAlchemyUnitOfWork(session))
            result = await use_case.execute(
                RegisterUserCommand(
                    email=email, password=password, name=name, role=UserRole.admin
                )
            )
            return result.is_ok()
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--db-uri", default=ApplicationConfig.DB_URI)
    args = parser.parse_args()

    email = args.email.lower()
    created = asyncio.run(create_admin_user(email, args.name, args.password, args.db_uri))
    if not created:
        print(f"User {email} already exists", file=sys.stderr)
        sys.exit(1)
    print(f"Admin user {email} created")


if __name__ == "__main__":
    main()
