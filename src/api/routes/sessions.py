from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    RevokeSessionUseCase,
    SessionInfo,
    SessionManager,
    SessionSummary,
)
from src.depends import get_current_session, get_session_manager, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class RevokeSessionResponse(BaseModel):
    """Response for bulk session revocation"""

    message: str
    revoked_count: int


class RevokeSpecificSessionResponse(BaseModel):
    """Response for specific session revocation"""

    message: str
    session_id: str
    revoked: bool


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionSummary])
async def list_sessions(
    current_session: SessionInfo = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """List the caller's active sessions, newest first."""
    return await session_manager.get_user_sessions(UUID(current_session.user.id))


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_all_sessions(
    current_session: SessionInfo = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Revoke All Sessions

    Logs the caller out everywhere, including the current session.
    """
    count = await session_manager.deactivate_all_user_sessions(
        UUID(current_session.user.id)
    )
    return {
        "message": f"Successfully revoked {count} session(s)",
        "revoked_count": count,
    }


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSpecificSessionResponse,
)
async def revoke_specific_session(
    session_id: str,
    current_session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Revoke Specific Session

    Authorization:
    - Users can revoke their own sessions
    - Admins can revoke any user's session

    Raises:
        - 403 Forbidden: Insufficient permissions
        - 404 Not Found: Session not found
    """
    use_case = RevokeSessionUseCase(uow, session_manager)
    result = await use_case.execute(
        session_id,
        UUID(current_session.user.id),
        current_session.user.role,
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {
        "message": "Session revoked successfully",
        "session_id": session_id,
        "revoked": result.value,
    }
