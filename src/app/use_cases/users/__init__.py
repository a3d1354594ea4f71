"""
User Use Cases

Account registration and self-service profile management.
"""

from .dtos import RegisterUserCommand, UpdateProfileCommand, UserProfile
from .profile_use_cases import GetProfileUseCase, UpdateProfileUseCase
from .register_initial_admin_use_case import RegisterInitialAdminUseCase
from .register_user_use_case import RegisterUserUseCase

__all__ = [
    "RegisterUserUseCase",
    "RegisterInitialAdminUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    # DTOs
    "RegisterUserCommand",
    "UpdateProfileCommand",
    "UserProfile",
]
