from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "validation_error"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS_ERROR = "http_status_error"
    PARSE_ERROR = "parse_error"
    TIMEOUT_ERROR = "timeout_error"
    INTERRUPTED = "interrupted"
    INTERNAL_ERROR = "internal_error"


class Phase(str, Enum):
    """Which remote call an error came from."""

    START = "start"
    STATUS_CHECK = "status_check"
    LIST = "list"
    EXECUTE = "execute"


class ControllerState(str, Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    START_FAILED = "start_failed"
    PARSE_FAILED = "parse_failed"
    STATUS_CHECK_FAILED = "status_check_failed"
    TIMED_OUT = "timed_out"
    INTERRUPTED = "interrupted"


class ExecutionStatus:
    """
    Status values the remote service is known to report.

    Statuses stay plain strings on the wire: the server may send values that
    are not listed here and those must keep the poll loop going.
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    TERMINAL = frozenset({COMPLETED, FAILED})

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return status in cls.TERMINAL
