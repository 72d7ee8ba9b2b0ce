"""
Task configuration structs.

A task holds the values a workflow author configures, which may contain
template placeholders. run() resolves every string through a
TemplateResolver first, then hands the plain values to the controller or
client. Tasks are populated before the call; nothing is inherited from a
host framework.

    task = RunRuleTask(url="${api_url}", api_key="${token}", rule_id="rule-123")
    result = task.run(resolver=MappingResolver({"api_url": ..., "token": ...}))
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from rulerun.core.cancellation import CancellationToken
from rulerun.core.controller import ExecutionController
from rulerun.core.listing import ListingClient
from rulerun.core.metrics import MetricsSink
from rulerun.core.settings import RuleRunSettings
from rulerun.core.trigger import TriggerClient
from rulerun.protocol.errors import ValidationError
from rulerun.protocol.models import (
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    ExecutionResult,
    PollingConfig,
    RuleListing,
    TriggerResult,
)
from rulerun.transport.base import Gateway
from rulerun.transport.http import HTTPGateway

TemplateResolver = Callable[[str], str]


def identity(value: str) -> str:
    return value


class MappingResolver:
    """Substitutes ${name} placeholders from a mapping."""

    def __init__(self, variables: Mapping[str, str]) -> None:
        self._variables = dict(variables)

    def __call__(self, value: str) -> str:
        try:
            return string.Template(value).substitute(self._variables)
        except KeyError as e:
            raise ValidationError(f"Unknown template variable {e}") from e
        except ValueError as e:
            raise ValidationError(f"Invalid template {value!r}: {e}") from e


def _render(resolver: TemplateResolver, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return resolver(value)


@dataclass
class RunRuleTask:
    url: Optional[str]
    api_key: Optional[str] = field(default=None, repr=False)
    rule_id: Optional[str] = None
    polling_interval: int = DEFAULT_POLL_INTERVAL
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def from_settings(cls, settings: RuleRunSettings, rule_id: str) -> RunRuleTask:
        return cls(
            url=settings.url,
            api_key=settings.credential(),
            rule_id=rule_id,
            polling_interval=settings.poll_interval,
            timeout=settings.timeout,
        )

    def run(
        self,
        *,
        resolver: TemplateResolver = identity,
        gateway: Optional[Gateway] = None,
        metrics: Optional[MetricsSink] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ExecutionResult:
        controller = ExecutionController(gateway or HTTPGateway(), metrics=metrics)
        return controller.execute(
            _render(resolver, self.url),
            _render(resolver, self.api_key),
            _render(resolver, self.rule_id),
            PollingConfig(interval_seconds=self.polling_interval, timeout_seconds=self.timeout),
            cancel,
        )


@dataclass
class ListRulesTask:
    url: Optional[str]
    api_key: Optional[str] = field(default=None, repr=False)
    page_size: Optional[int] = DEFAULT_PAGE_SIZE
    page_number: Optional[int] = DEFAULT_PAGE_NUMBER

    @classmethod
    def from_settings(cls, settings: RuleRunSettings, page_number: int = DEFAULT_PAGE_NUMBER) -> ListRulesTask:
        return cls(
            url=settings.url,
            api_key=settings.credential(),
            page_size=settings.page_size,
            page_number=page_number,
        )

    def run(
        self,
        *,
        resolver: TemplateResolver = identity,
        gateway: Optional[Gateway] = None,
    ) -> RuleListing:
        client = ListingClient(gateway or HTTPGateway())
        return client.list_rules(
            _render(resolver, self.url),
            _render(resolver, self.api_key),
            self.page_size if self.page_size is not None else DEFAULT_PAGE_SIZE,
            self.page_number if self.page_number is not None else DEFAULT_PAGE_NUMBER,
        )


@dataclass
class TriggerRuleTask:
    url: Optional[str]
    api_key: Optional[str] = field(default=None, repr=False)
    rule_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: RuleRunSettings, rule_id: str) -> TriggerRuleTask:
        return cls(url=settings.url, api_key=settings.credential(), rule_id=rule_id)

    def run(
        self,
        *,
        resolver: TemplateResolver = identity,
        gateway: Optional[Gateway] = None,
    ) -> TriggerResult:
        client = TriggerClient(gateway or HTTPGateway())
        return client.trigger(
            _render(resolver, self.url),
            _render(resolver, self.api_key),
            _render(resolver, self.rule_id),
        )
