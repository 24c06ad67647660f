"""
identity_orchestrator.auth.errors

Domain exceptions for the authentication cycle.
"""

from __future__ import annotations

INVALID_STATE_MESSAGE = "Invalid state"


class AuthError(Exception):
    pass


class InvalidStateError(AuthError):
    """
    The callback's state does not match a pending login transaction.
    Recovered by starting the login over, never surfaced to the user.
    """

    def __init__(self, message: str = INVALID_STATE_MESSAGE) -> None:
        super().__init__(message)


class TokenExchangeError(AuthError):
    pass


class SessionRequiredError(AuthError):
    pass


class FederationError(AuthError):
    pass


def is_invalid_state(exc: BaseException) -> bool:
    return isinstance(exc, InvalidStateError) or str(exc) == INVALID_STATE_MESSAGE
