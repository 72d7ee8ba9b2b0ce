from .enums import ControllerState, ErrorCode, ExecutionStatus, Phase
from .errors import (
    ExecutionInterruptedError,
    ExecutionTimeoutError,
    HttpStatusError,
    ListError,
    ListHttpStatusError,
    ListParseError,
    ParseError,
    RuleRunError,
    TransportError,
    ValidationError,
)
from .models import (
    ExecutionHandle,
    ExecutionResult,
    HttpResponse,
    PollingConfig,
    Rule,
    RuleListing,
    TriggerResult,
)

__all__ = [
    "ControllerState",
    "ErrorCode",
    "ExecutionStatus",
    "Phase",
    "RuleRunError",
    "ValidationError",
    "TransportError",
    "HttpStatusError",
    "ParseError",
    "ExecutionTimeoutError",
    "ExecutionInterruptedError",
    "ListError",
    "ListHttpStatusError",
    "ListParseError",
    "ExecutionHandle",
    "ExecutionResult",
    "HttpResponse",
    "PollingConfig",
    "Rule",
    "RuleListing",
    "TriggerResult",
]
