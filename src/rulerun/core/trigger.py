"""
TriggerClient: fire a rule execution without waiting for it.

Unlike the controller's start call, any 2xx answer counts as success and the
response body is not inspected.
"""

from __future__ import annotations

import logging

from rulerun.core.parsing import require
from rulerun.protocol.enums import Phase
from rulerun.protocol.errors import HttpStatusError, TransportError
from rulerun.protocol.models import TriggerResult
from rulerun.transport.base import (
    DEFAULT_TIMEOUT_SECONDS,
    Gateway,
    build_headers,
    join_url,
    path_segment,
)

logger = logging.getLogger(__name__)


def execute_path(rule_id: str) -> str:
    return f"/v1/rules/{path_segment(rule_id)}/execute"


class TriggerClient:
    def __init__(self, gateway: Gateway, *, request_timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._gateway = gateway
        self._request_timeout = request_timeout

    def trigger(self, url: str, credential: str, rule_id: str) -> TriggerResult:
        url = require(url, "API URL")
        credential = require(credential, "API key")
        rule_id = require(rule_id, "ruleId")

        try:
            response = self._gateway.send(
                "POST",
                join_url(url, execute_path(rule_id)),
                build_headers(credential),
                "{}",
                self._request_timeout,
            )
        except TransportError as e:
            e.phase = Phase.EXECUTE
            raise

        if not response.ok:
            logger.warning("Rule %s execute call failed with HTTP %d", rule_id, response.status_code)
            raise HttpStatusError(
                f"Failed to execute rule. Status code: {response.status_code}",
                status_code=response.status_code,
                body=response.body,
                phase=Phase.EXECUTE,
            )

        logger.info("Rule %s triggered", rule_id)
        return TriggerResult(rule_id=rule_id)
