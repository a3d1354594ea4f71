"""
Session Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import SessionState, TokenType, UserRole

# Export all entities
from .user import User
from .session import Session

__all__ = [
    # Enums
    "UserRole",
    "SessionState",
    "TokenType",
    # Entities
    "User",
    "Session",
]
