"""
Session Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """User role"""

    admin = "admin"
    user = "user"


class SessionState(str, Enum):
    """Derived lifecycle state of a session"""

    active = "active"
    expired = "expired"
    inactive = "inactive"


class TokenType(str, Enum):
    """Kind of signed token bound to a session"""

    access = "access"
    refresh = "refresh"
