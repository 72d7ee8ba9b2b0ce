from .core.cancellation import CancellationToken
from .core.controller import ExecutionController
from .core.listing import ListingClient
from .core.metrics import InMemoryMetricsSink, MetricsSink
from .core.tasks import ListRulesTask, MappingResolver, RunRuleTask, TriggerRuleTask
from .core.trigger import TriggerClient
from .protocol import (
    ExecutionInterruptedError,
    ExecutionResult,
    ExecutionStatus,
    ExecutionTimeoutError,
    HttpStatusError,
    ListError,
    ParseError,
    PollingConfig,
    Rule,
    RuleListing,
    RuleRunError,
    TransportError,
    TriggerResult,
    ValidationError,
)
from .transport import Gateway, HTTPGateway

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "ExecutionController",
    "ListingClient",
    "TriggerClient",
    "MetricsSink",
    "InMemoryMetricsSink",
    "RunRuleTask",
    "ListRulesTask",
    "TriggerRuleTask",
    "MappingResolver",
    "Gateway",
    "HTTPGateway",
    "ExecutionResult",
    "ExecutionStatus",
    "PollingConfig",
    "Rule",
    "RuleListing",
    "TriggerResult",
    "RuleRunError",
    "ValidationError",
    "TransportError",
    "HttpStatusError",
    "ParseError",
    "ExecutionTimeoutError",
    "ExecutionInterruptedError",
    "ListError",
]
