"""Shared request validation and response decoding."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Type

from rulerun.protocol.enums import Phase
from rulerun.protocol.errors import ParseError, ValidationError, excerpt


def require(value: Optional[str], what: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{what} must be provided")
    return str(value)


def decode_object(
    body: str,
    phase: Phase,
    error_cls: Type[ParseError] = ParseError,
) -> Dict[str, Any]:
    try:
        decoded = json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise error_cls(
            f"Failed to parse {phase.value} response: {e}: {excerpt(body)}",
            phase=phase,
            body=body,
        ) from e

    if not isinstance(decoded, dict):
        raise error_cls(
            f"Failed to parse {phase.value} response: expected a JSON object, "
            f"got {type(decoded).__name__}",
            phase=phase,
            body=body,
        )
    return decoded


def require_field(data: Dict[str, Any], name: str, phase: Phase, body: str) -> str:
    value = data.get(name)
    if value is None or isinstance(value, (dict, list)):
        raise ParseError(
            f"Failed to parse {phase.value} response: missing field '{name}'",
            phase=phase,
            body=body,
        )
    return str(value)
