"""
Domain errors raised by the exchange services.

Every error carries a machine‑readable ``code`` and the HTTP status it
maps to.  The application registers a single exception handler for
``ExchangeError`` (see ``main.py``) which renders the error as
``{"detail": <message>, "code": <code>}``, so endpoints never need to
translate these exceptions themselves.
"""


class ExchangeError(Exception):
    """Base class for errors reported back to the caller of a command."""

    code = "exchange_error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ExchangeError):
    """Unknown exchange id, or unknown voter on vote deletion."""

    code = "not_found"
    status_code = 404


class UnauthorizedError(ExchangeError):
    """Secret missing or not matching the exchange."""

    code = "unauthorized"
    status_code = 401


class InvalidStateError(ExchangeError):
    """Operation not legal in the exchange's current stage."""

    code = "invalid_state"
    status_code = 409


class InvalidTransitionError(ExchangeError):
    """Requested stage pair is not in the transition table, or is a no-op."""

    code = "invalid_transition"
    status_code = 400


class LockedError(ExchangeError):
    """Mutation attempted on a frozen exchange."""

    code = "locked"
    status_code = 423


class InputValidationError(ExchangeError):
    """Required input is empty or refers to unknown entries."""

    code = "validation_error"
    status_code = 422
