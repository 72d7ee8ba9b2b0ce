"""
Data models for rulerun.

Models:
- ExecutionHandle: identifier assigned by the server on start
- PollingConfig: poll interval and overall budget
- ExecutionResult: final outcome of a start-then-poll run
- Rule / RuleListing: one page of the rule listing
- HttpResponse: raw status + body returned by the gateway
- TriggerResult: outcome of the fire-and-forget execute call
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .enums import Phase
from .errors import ListParseError, ValidationError

DEFAULT_POLL_INTERVAL = 5
DEFAULT_TIMEOUT = 3600
DEFAULT_PAGE_SIZE = 100
DEFAULT_PAGE_NUMBER = 1


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class ExecutionHandle:
    execution_id: str


@dataclass(frozen=True)
class PollingConfig:
    """
    Poll loop timing, both values in whole seconds.

    No relation between the two is enforced: an interval longer than the
    timeout simply times out after the first wait.
    """

    interval_seconds: int = DEFAULT_POLL_INTERVAL
    timeout_seconds: int = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        _require_positive_int("interval_seconds", self.interval_seconds)
        _require_positive_int("timeout_seconds", self.timeout_seconds)


@dataclass(frozen=True)
class ExecutionResult:
    execution_id: str
    status: str
    polls: int = 0
    elapsed_seconds: float = 0.0

    @property
    def handle(self) -> ExecutionHandle:
        return ExecutionHandle(self.execution_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "executionId": self.execution_id,
            "status": self.status,
            "polls": self.polls,
            "elapsedSeconds": round(self.elapsed_seconds, 3),
        }


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _scalar_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ListParseError(
            f"Failed to parse rules response: rule field '{key}' is not a scalar",
            phase=Phase.LIST,
        )
    return str(value)


@dataclass(frozen=True)
class Rule:
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Rule:
        # Unknown keys are dropped, missing keys stay None.
        return cls(
            id=_scalar_str(data, "id"),
            name=_scalar_str(data, "name"),
            description=_scalar_str(data, "description"),
            status=_scalar_str(data, "status"),
            created_at=_scalar_str(data, "createdAt"),
            updated_at=_scalar_str(data, "updatedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class RuleListing:
    rules: Optional[List[Rule]] = None
    total_count: Optional[int] = None
    page_size: Optional[int] = None
    page_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rules": [r.to_dict() for r in self.rules] if self.rules is not None else None,
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "pageNumber": self.page_number,
        }


@dataclass(frozen=True)
class TriggerResult:
    rule_id: str
    status: str = "success"
    message: str = "Rule executed successfully"

    def to_dict(self) -> Dict[str, Any]:
        return {"ruleId": self.rule_id, "status": self.status, "message": self.message}
