"""
Infrastructure errors.

These are raised, never returned in a Result. Business failures (expired,
revoked, not found) are Result errors instead.
"""


class InfrastructureError(Exception):
    """Base class for failures outside business rules"""


class TokenConfigurationError(InfrastructureError):
    """Signing secrets missing or unusable. Fatal at startup."""


class TokenSigningError(InfrastructureError):
    """A token could not be signed at runtime"""


class PersistenceError(InfrastructureError):
    """The session store could not complete a read or write"""
