"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase

__all__ = [
    "LoginUseCase",
]
