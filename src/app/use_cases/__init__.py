"""
Use Cases

Organized by domain folder:
- auth/: Login
- sessions/: Session lifecycle
- users/: Registration and profile
"""

from .auth import LoginUseCase
from .sessions import SessionManager
from .users import (
    GetProfileUseCase,
    RegisterInitialAdminUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)

__all__ = [
    "LoginUseCase",
    "SessionManager",
    "RegisterUserUseCase",
    "RegisterInitialAdminUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
]
