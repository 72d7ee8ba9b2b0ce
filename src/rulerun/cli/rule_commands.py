"""
Rule CLI commands for rulerun.

Commands:
    rulerun run <rule-id>        Start a rule execution and wait for its final status
    rulerun list                 List one page of rules
    rulerun trigger <rule-id>    Fire a rule execution without waiting
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from rulerun.core.settings import RuleRunSettings, get_settings
from rulerun.core.tasks import ListRulesTask, RunRuleTask, TriggerRuleTask
from rulerun.protocol.errors import RuleRunError


def load_settings() -> RuleRunSettings:
    try:
        return get_settings()
    except PydanticValidationError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        sys.exit(2)


def _settings_with_overrides(args) -> RuleRunSettings:
    settings = load_settings()
    overrides: Dict[str, Any] = {}
    if getattr(args, "url", None):
        overrides["url"] = args.url.rstrip("/")
    if getattr(args, "api_key", None):
        overrides["api_key"] = args.api_key
    if getattr(args, "interval", None) is not None:
        overrides["poll_interval"] = args.interval
    if getattr(args, "timeout", None) is not None:
        overrides["timeout"] = args.timeout
    if getattr(args, "page_size", None) is not None:
        overrides["page_size"] = args.page_size
    if not overrides:
        return settings
    # model_validate re-runs field validation on the merged values
    merged = settings.model_dump()
    merged.update(overrides)
    try:
        return RuleRunSettings.model_validate(merged)
    except PydanticValidationError as e:
        print(f"Invalid option: {e}", file=sys.stderr)
        sys.exit(2)


def rule_run(args) -> None:
    """Start a rule execution and poll until it reaches a terminal status."""
    settings = _settings_with_overrides(args)
    task = RunRuleTask.from_settings(settings, args.rule_id)

    try:
        result = task.run()
    except RuleRunError as e:
        print(f"Run error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Run interrupted", file=sys.stderr)
        sys.exit(130)

    _print_output(result.to_dict(), getattr(args, "output", "table"), "run")


def rule_list(args) -> None:
    """List one page of rules."""
    settings = _settings_with_overrides(args)
    task = ListRulesTask.from_settings(settings, page_number=args.page_number)

    try:
        listing = task.run()
    except RuleRunError as e:
        print(f"List error: {e}", file=sys.stderr)
        sys.exit(1)

    output_format = getattr(args, "output", "table")
    if output_format == "json":
        print(json.dumps(listing.to_dict(), indent=2))
        return

    if listing.rules is None:
        print("No rules in response.")
        return
    if not listing.rules:
        print("No rules found.")
        return

    print(f"{'RULE ID':<38} {'NAME':<30} {'STATUS':<12} {'UPDATED'}")
    print("-" * 100)
    for rule in listing.rules:
        print(
            f"{(rule.id or '')[:36]:<38} {(rule.name or '')[:28]:<30} "
            f"{rule.status or '-':<12} {(rule.updated_at or '')[:19]}"
        )
    print(
        f"\nPage {listing.page_number} (size {listing.page_size}), "
        f"total: {listing.total_count} rules"
    )


def rule_trigger(args) -> None:
    """Fire a rule execution without waiting for it."""
    settings = _settings_with_overrides(args)
    task = TriggerRuleTask.from_settings(settings, args.rule_id)

    try:
        result = task.run()
    except RuleRunError as e:
        print(f"Trigger error: {e}", file=sys.stderr)
        sys.exit(1)

    _print_output(result.to_dict(), getattr(args, "output", "table"), "trigger")


def _print_output(data: Dict[str, Any], fmt: str, kind: str) -> None:
    if fmt == "json":
        print(json.dumps(data, indent=2))
        return

    print(f"{kind}:")
    for key, value in data.items():
        print(f"  {key:<16} {value}")
