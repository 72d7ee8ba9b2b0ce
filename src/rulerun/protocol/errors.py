"""
Error taxonomy for rulerun.

Every error raised by the gateway, the controller or the clients derives
from RuleRunError and carries an ErrorCode. Nothing here retries; the caller
decides what to do with each class of failure.
"""

from __future__ import annotations

from typing import Optional

from .enums import ErrorCode, Phase

BODY_EXCERPT_LIMIT = 500


def excerpt(body: Optional[str], limit: int = BODY_EXCERPT_LIMIT) -> str:
    if not body:
        return ""
    if len(body) <= limit:
        return body
    return body[:limit] + "...(truncated)"


class RuleRunError(Exception):
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.code = code or ErrorCode.INTERNAL_ERROR


class ValidationError(RuleRunError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VALIDATION_ERROR)


class TransportError(RuleRunError):
    """Raised on connection, TLS, DNS or I/O failure (no HTTP status)."""

    def __init__(self, message: str, *, phase: Optional[Phase] = None):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR)
        self.phase = phase


class HttpStatusError(RuleRunError):
    """Raised when the server answers with an unexpected status code."""

    def __init__(self, message: str, *, status_code: int, body: str, phase: Phase):
        super().__init__(message, ErrorCode.HTTP_STATUS_ERROR)
        self.status_code = status_code
        self.body = body
        self.phase = phase


class ParseError(RuleRunError):
    """Raised when a response body is not JSON or lacks an expected field."""

    def __init__(self, message: str, *, phase: Phase, body: Optional[str] = None):
        super().__init__(message, ErrorCode.PARSE_ERROR)
        self.phase = phase
        self.body = body


class ExecutionTimeoutError(RuleRunError, TimeoutError):
    """Raised when the poll loop exceeds its budget."""

    def __init__(
        self,
        message: str,
        *,
        execution_id: str,
        timeout_seconds: int,
        elapsed_seconds: float,
        polls: int,
    ):
        super().__init__(message, ErrorCode.TIMEOUT_ERROR)
        self.execution_id = execution_id
        self.timeout_seconds = timeout_seconds
        self.elapsed_seconds = elapsed_seconds
        self.polls = polls


class ExecutionInterruptedError(RuleRunError):
    """Raised when the wait between polls is cancelled."""

    def __init__(self, message: str, *, execution_id: str, polls: int):
        super().__init__(message, ErrorCode.INTERRUPTED)
        self.execution_id = execution_id
        self.polls = polls


class ListError(RuleRunError):
    """Base for failures of the listing call."""


class ListHttpStatusError(HttpStatusError, ListError):
    pass


class ListParseError(ParseError, ListError):
    pass
