from .cancellation import CancellationToken
from .controller import ExecutionController
from .listing import ListingClient
from .metrics import InMemoryMetricsSink, MetricsSink, NullMetricsSink
from .trigger import TriggerClient

__all__ = [
    "CancellationToken",
    "ExecutionController",
    "ListingClient",
    "TriggerClient",
    "MetricsSink",
    "NullMetricsSink",
    "InMemoryMetricsSink",
]
