from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.app.use_cases.sessions import SessionInfo, SessionManager
from src.depends import get_session_manager, require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


class CleanupResponse(BaseModel):
    message: str
    deactivated_count: int


@router.post(
    "/sessions/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupResponse,
)
async def cleanup_expired_sessions(
    current_session: SessionInfo = Depends(require_admin),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Cleanup Expired Sessions

    Deactivates every active session past its expiry. Normally run by the
    scheduled cleanup script; exposed here for operators.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Caller is not an admin
    """
    count = await session_manager.cleanup_expired_sessions()
    return {
        "message": f"Deactivated {count} expired session(s)",
        "deactivated_count": count,
    }
