import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.in_memory import InMemoryStore
from src.adapter.services.jwt_token_codec import JwtTokenCodec
from src.app.services.errors import PersistenceError
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_persistence_error(request: Request, exc: PersistenceError):
    error_dict = {"code": "SERVICE_UNAVAILABLE", "message": "Session store unavailable"}
    logger.error(f"Persistence error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    # Raises TokenConfigurationError when a secret is missing
    token_codec = JwtTokenCodec(
        ApplicationConfig.ACCESS_TOKEN_SECRET,
        ApplicationConfig.REFRESH_TOKEN_SECRET,
        access_lifetime=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_lifetime=timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
    )

    engine = None
    session_factory = None
    memory_store = None
    if ApplicationConfig.SESSION_STORE_BACKEND == "memory":
        memory_store = InMemoryStore()
    else:
        engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
        session_factory = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="Session Service", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.token_codec = token_codec
    app.state.session_factory = session_factory
    app.state.memory_store = memory_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, sessions

    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)

    return app
