"""Deactivate expired sessions once.

Meant to be run by an external scheduler (cron, systemd timer, k8s CronJob):

    python -m scripts.cleanup_expired_sessions
"""

import asyncio
import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.jwt_token_codec import JwtTokenCodec
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.sessions import SessionManager

logger = logging.getLogger(__name__)


async def run_cleanup(config=ApplicationConfig) -> int:
    token_codec = JwtTokenCodec(
        config.ACCESS_TOKEN_SECRET,
        config.REFRESH_TOKEN_SECRET,
        access_lifetime=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_lifetime=timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    engine = create_async_engine(config.DB_URI, echo=False, future=True)
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_factory() as session:
            manager = SessionManager(SqlAlchemyUnitOfWork(session), token_codec)
            return await manager.cleanup_expired_sessions()
    finally:
        await engine.dispose()


def main() -> None:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
    count = asyncio.run(run_cleanup())
    print(f"Deactivated {count} expired session(s)")


if __name__ == "__main__":
    main()
