from datetime import UTC
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError, unauthenticated
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import LoginUseCase
from src.app.use_cases.sessions import RenewedSession, SessionInfo, SessionManager
from src.app.use_cases.users import (
    GetProfileUseCase,
    RegisterInitialAdminUseCase,
    RegisterUserCommand,
    RegisterUserUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
    UserProfile,
)
from src.depends import (
    get_current_session,
    get_session_manager,
    get_unit_of_work,
    require_admin,
)
from src.domain.entities import UserRole

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class LogoutResponse(BaseModel):
    message: str


def _set_session_cookie(request: Request, response: Response, session: SessionInfo):
    config = request.app.state.config
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=session.session_id,
        expires=session.expires_at.replace(tzinfo=UTC),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    User Login

    Verifies credentials and opens a session. The response and the session
    cookie carry only the opaque session id.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: User disabled
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, session_manager)
    result = await use_case.execute(
        body.email,
        body.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("USER_DISABLED", "USER_INACTIVE"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    _set_session_cookie(request, response, result.value)
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    current_session: SessionInfo = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Deactivate the current session and clear the session cookie."""
    result = await session_manager.deactivate_session(current_session.session_id)
    if result.is_err():
        raise ServerError(result.error)

    response.delete_cookie(request.app.state.config.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/verify", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def verify(current_session: SessionInfo = Depends(get_current_session)):
    """Return the current session and its user."""
    return current_session


@router.post(
    "/renew-session", status_code=status.HTTP_200_OK, response_model=RenewedSession
)
async def renew_session(
    current_session: SessionInfo = Depends(get_current_session),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Renew Session

    Re-signs the access token behind the current session. The absolute
    session expiry is unchanged.

    Raises:
        - 401 Unauthorized: Session missing, expired or revoked
    """
    result = await session_manager.renew_access_token(current_session.session_id)

    if result.is_err():
        if result.error.code in ("SESSION_NOT_FOUND", "SESSION_EXPIRED"):
            raise unauthenticated()
        raise ServerError(result.error)

    return result.value


class RegisterInitialRequest(BaseModel):
    """First-admin bootstrap payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    name: str = Field(..., min_length=2, max_length=100)


class RegisterRequest(RegisterInitialRequest):
    role: UserRole = Field(default=UserRole.user)


class UpdateProfileRequest(BaseModel):
    """Only the fields present are changed"""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)


def _raise_registration_error(error):
    if error.code in ("EMAIL_ALREADY_EXISTS", "USERS_ALREADY_EXIST"):
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    raise ServerError(error)


@router.post(
    "/register-initial", status_code=status.HTTP_201_CREATED, response_model=UserProfile
)
async def register_initial(
    body: RegisterInitialRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Register Initial Admin

    Creates the first account, as admin, while no user exists. No session is
    opened; log in afterwards.

    Raises:
        - 409 Conflict: A user already exists
    """
    command = RegisterUserCommand(email=body.email, password=body.password, name=body.name)
    result = await RegisterInitialAdminUseCase(uow).execute(command)
    if result.is_err():
        _raise_registration_error(result.error)
    return result.value


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserProfile)
async def register(
    body: RegisterRequest,
    current_session: SessionInfo = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register User

    Admin-only account creation.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Caller is not an admin
        - 409 Conflict: Email already registered
    """
    command = RegisterUserCommand(
        email=body.email, password=body.password, name=body.name, role=body.role
    )
    result = await RegisterUserUseCase(uow).execute(command)
    if result.is_err():
        _raise_registration_error(result.error)
    return result.value


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def get_profile(
    current_session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Return the account behind the current session."""
    result = await GetProfileUseCase(uow).execute(UUID(current_session.user.id))
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
    return result.value


@router.put("/profile", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def update_profile(
    body: UpdateProfileRequest,
    current_session: SessionInfo = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Profile

    Raises:
        - 401 Unauthorized: Not authenticated
        - 409 Conflict: Email already in use
    """
    command = UpdateProfileCommand(
        name=body.name, email=body.email, password=body.password
    )
    result = await UpdateProfileUseCase(uow).execute(UUID(current_session.user.id), command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
