"""
ExecutionController: start a remote rule execution and poll it to completion.

Protocol:

    NOT_STARTED -> STARTED -> POLLING -> COMPLETED | FAILED

with error exits START_FAILED, PARSE_FAILED, STATUS_CHECK_FAILED, TIMED_OUT
and INTERRUPTED.

Start is not idempotent (each POST creates a new remote execution) so it is
sent exactly once. Status checks are plain reads but failures are surfaced
immediately instead of retried.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from rulerun.core.cancellation import CancellationToken
from rulerun.core.metrics import MetricsSink, NullMetricsSink
from rulerun.core.parsing import decode_object, require, require_field
from rulerun.protocol.enums import ControllerState, ExecutionStatus, Phase
from rulerun.protocol.errors import (
    ExecutionInterruptedError,
    ExecutionTimeoutError,
    HttpStatusError,
    ParseError,
    TransportError,
    excerpt,
)
from rulerun.protocol.models import ExecutionResult, PollingConfig
from rulerun.transport.base import (
    DEFAULT_TIMEOUT_SECONDS,
    Gateway,
    build_headers,
    join_url,
    path_segment,
)

logger = logging.getLogger(__name__)

EXECUTIONS_METRIC = "rule_executions"


def start_path(rule_id: str) -> str:
    return f"/api/v1/rules/{path_segment(rule_id)}/run"


def status_path(execution_id: str) -> str:
    return f"/api/v1/rules/executions/{path_segment(execution_id)}/status"


class ExecutionController:
    """
    Runs the start-then-poll protocol over a Gateway.

    The controller keeps no per-run state on the instance, so one controller
    can serve concurrent execute() calls.
    """

    def __init__(
        self,
        gateway: Gateway,
        *,
        metrics: Optional[MetricsSink] = None,
        clock: Callable[[], float] = time.monotonic,
        request_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._gateway = gateway
        self._metrics = metrics or NullMetricsSink()
        self._clock = clock
        self._request_timeout = request_timeout

    def execute(
        self,
        url: str,
        credential: str,
        rule_id: str,
        polling: Optional[PollingConfig] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ExecutionResult:
        url = require(url, "API URL")
        credential = require(credential, "API key")
        rule_id = require(rule_id, "ruleId")
        polling = polling or PollingConfig()
        cancel = cancel or CancellationToken()
        headers = build_headers(credential)

        execution_id = self._start(url, headers, rule_id)
        logger.info(
            "Rule %s started execution %s (%s)", rule_id, execution_id, ControllerState.STARTED.value
        )

        result = self._poll(url, headers, execution_id, polling, cancel)
        self._metrics.increment(EXECUTIONS_METRIC, status=result.status, rule_id=rule_id)
        logger.info(
            "Execution %s of rule %s finished with %s after %d polls (%.1fs)",
            execution_id,
            rule_id,
            result.status,
            result.polls,
            result.elapsed_seconds,
        )
        return result

    # ------------------------------------------------------------------
    # Start
    # ------------------------------------------------------------------
    def _start(self, url: str, headers, rule_id: str) -> str:
        try:
            response = self._gateway.send(
                "POST", join_url(url, start_path(rule_id)), headers, None, self._request_timeout
            )
        except TransportError as e:
            e.phase = Phase.START
            logger.warning("Rule %s: %s", rule_id, ControllerState.START_FAILED.value)
            raise

        if response.status_code != 200:
            logger.warning(
                "Rule %s: %s with HTTP %d", rule_id, ControllerState.START_FAILED.value, response.status_code
            )
            raise HttpStatusError(
                f"Failed to start rule execution (HTTP {response.status_code}): {excerpt(response.body)}",
                status_code=response.status_code,
                body=response.body,
                phase=Phase.START,
            )

        try:
            data = decode_object(response.body, Phase.START)
            return require_field(data, "executionId", Phase.START, response.body)
        except ParseError:
            logger.warning("Rule %s: %s on start response", rule_id, ControllerState.PARSE_FAILED.value)
            raise

    # ------------------------------------------------------------------
    # Poll loop
    # ------------------------------------------------------------------
    def _poll(
        self,
        url: str,
        headers,
        execution_id: str,
        polling: PollingConfig,
        cancel: CancellationToken,
    ) -> ExecutionResult:
        started_at = self._clock()
        polls = 0

        while True:
            elapsed = self._clock() - started_at
            if elapsed > polling.timeout_seconds:
                logger.warning(
                    "Execution %s: %s after %.1fs and %d polls",
                    execution_id,
                    ControllerState.TIMED_OUT.value,
                    elapsed,
                    polls,
                )
                raise ExecutionTimeoutError(
                    f"Rule execution {execution_id} timed out after {polling.timeout_seconds} seconds "
                    f"({elapsed:.1f}s elapsed, {polls} status checks)",
                    execution_id=execution_id,
                    timeout_seconds=polling.timeout_seconds,
                    elapsed_seconds=elapsed,
                    polls=polls,
                )

            if cancel.wait(polling.interval_seconds):
                logger.warning("Execution %s: %s", execution_id, ControllerState.INTERRUPTED.value)
                raise ExecutionInterruptedError(
                    f"Polling interrupted while waiting for rule execution {execution_id}",
                    execution_id=execution_id,
                    polls=polls,
                )

            status = self._check_status(url, headers, execution_id)
            polls += 1
            logger.debug("Execution %s status %s (poll %d)", execution_id, status, polls)

            if ExecutionStatus.is_terminal(status):
                return ExecutionResult(
                    execution_id=execution_id,
                    status=status,
                    polls=polls,
                    elapsed_seconds=self._clock() - started_at,
                )

    def _check_status(self, url: str, headers, execution_id: str) -> str:
        try:
            response = self._gateway.send(
                "GET", join_url(url, status_path(execution_id)), headers, None, self._request_timeout
            )
        except TransportError as e:
            e.phase = Phase.STATUS_CHECK
            logger.warning("Execution %s: %s", execution_id, ControllerState.STATUS_CHECK_FAILED.value)
            raise

        if response.status_code != 200:
            logger.warning(
                "Execution %s: %s with HTTP %d",
                execution_id,
                ControllerState.STATUS_CHECK_FAILED.value,
                response.status_code,
            )
            raise HttpStatusError(
                f"Failed to check rule execution status (HTTP {response.status_code}): "
                f"{excerpt(response.body)}",
                status_code=response.status_code,
                body=response.body,
                phase=Phase.STATUS_CHECK,
            )

        try:
            data = decode_object(response.body, Phase.STATUS_CHECK)
            return require_field(data, "status", Phase.STATUS_CHECK, response.body)
        except ParseError:
            logger.warning("Execution %s: %s on status response", execution_id, ControllerState.PARSE_FAILED.value)
            raise
