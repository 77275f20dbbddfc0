"""Error translation for Jira transport failures."""

from __future__ import annotations

from typing import Any

from .config import AUTH_FAILURE_STATUS_CODES, AUTHENTICATION_ERROR_MESSAGE


class AuthenticationError(RuntimeError):
    """Jira rejected the configured credentials (HTTP 401/403)."""

    def __init__(self, message: str = AUTHENTICATION_ERROR_MESSAGE):
        super().__init__(message)


def _status_code(response: Any, error: BaseException) -> int | None:
    if response is not None:
        return getattr(response, "status_code", None)
    return getattr(error, "status_code", None)


def jira_return_error(response: Any, error: BaseException | None) -> BaseException | None:
    """Map a Jira call outcome to the error callers should see.

    Returns ``None`` when there is no error, an :class:`AuthenticationError`
    when the response status is 401 or 403, and ``error`` itself otherwise.
    """
    if error is None:
        return None
    if _status_code(response, error) in AUTH_FAILURE_STATUS_CODES:
        return AuthenticationError()
    return error
