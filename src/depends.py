from typing import Optional

from fastapi import Depends, Request, status
from libs.result import Error

from src.adapter.services.in_memory_unit_of_work import InMemoryUnitOfWork
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, unauthenticated
from src.app.services.token_codec import ITokenCodec
from src.app.use_cases.sessions import SessionInfo, SessionManager
from src.domain.entities import UserRole


async def get_unit_of_work(request: Request):
    state = request.app.state
    if state.memory_store is not None:
        yield InMemoryUnitOfWork(state.memory_store)
    else:
        async with state.session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)


def get_token_codec(request: Request) -> ITokenCodec:
    return request.app.state.token_codec


def get_session_manager(
    uow=Depends(get_unit_of_work),
    token_codec: ITokenCodec = Depends(get_token_codec),
) -> SessionManager:
    return SessionManager(uow, token_codec)


def get_session_id(request: Request) -> Optional[str]:
    """Session id from the configured header, falling back to the cookie"""
    config = request.app.state.config
    session_id = request.headers.get(config.SESSION_HEADER_NAME)
    if not session_id:
        session_id = request.cookies.get(config.SESSION_COOKIE_NAME)
    return session_id or None


async def get_current_session(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
) -> SessionInfo:
    """
    Dependency that authenticates the request by its opaque session id.

    Returns:
        Verified SessionInfo

    Raises:
        ClientError: 401 for any missing, unknown, expired or revoked session
    """
    session_id = get_session_id(request)
    if session_id is None:
        raise unauthenticated()

    session = await session_manager.verify_session(session_id)
    if session is None:
        raise unauthenticated()

    return session


async def require_admin(
    current_session: SessionInfo = Depends(get_current_session),
) -> SessionInfo:
    """Dependency that additionally requires the admin role"""
    if current_session.user.role != UserRole.admin.value:
        raise ClientError(
            Error("FORBIDDEN", "Admin role required"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_session
