"""
ListingClient: fetch one page of rules.

No pagination traversal happens here; callers iterate pages themselves.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from rulerun.core.parsing import decode_object, require
from rulerun.protocol.enums import Phase
from rulerun.protocol.errors import (
    ListHttpStatusError,
    ListParseError,
    TransportError,
    ValidationError,
    excerpt,
)
from rulerun.protocol.models import (
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    Rule,
    RuleListing,
)
from rulerun.transport.base import DEFAULT_TIMEOUT_SECONDS, Gateway, build_headers, join_url

logger = logging.getLogger(__name__)

RULES_PATH = "/api/v1/rules"


def _optional_int(data, key: str, body: str):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ListParseError(
            f"Failed to parse rules response: '{key}' is not an integer",
            phase=Phase.LIST,
            body=body,
        )
    return value


class ListingClient:
    def __init__(self, gateway: Gateway, *, request_timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._gateway = gateway
        self._request_timeout = request_timeout

    def list_rules(
        self,
        url: str,
        credential: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_number: int = DEFAULT_PAGE_NUMBER,
    ) -> RuleListing:
        url = require(url, "API URL")
        credential = require(credential, "API key")
        for name, value in (("pageSize", page_size), ("pageNumber", page_number)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValidationError(f"{name} must be a positive integer, got {value!r}")

        query = urlencode({"pageSize": page_size, "pageNumber": page_number})
        try:
            response = self._gateway.send(
                "GET",
                f"{join_url(url, RULES_PATH)}?{query}",
                build_headers(credential),
                None,
                self._request_timeout,
            )
        except TransportError as e:
            e.phase = Phase.LIST
            raise

        if response.status_code != 200:
            logger.warning("Listing rules failed with HTTP %d", response.status_code)
            raise ListHttpStatusError(
                f"Failed to list rules (HTTP {response.status_code}): {excerpt(response.body)}",
                status_code=response.status_code,
                body=response.body,
                phase=Phase.LIST,
            )

        listing = self._decode(response.body)
        logger.info(
            "Listed %d rules (page %s, size %s, total %s)",
            len(listing.rules or ()),
            listing.page_number,
            listing.page_size,
            listing.total_count,
        )
        return listing

    def _decode(self, body: str) -> RuleListing:
        data = decode_object(body, Phase.LIST, ListParseError)

        raw_rules = data.get("rules")
        # A missing 'rules' key stays None rather than an empty page.
        if raw_rules is not None and (
            not isinstance(raw_rules, list) or not all(isinstance(r, dict) for r in raw_rules)
        ):
            raise ListParseError(
                "Failed to parse rules response: 'rules' must be a list of objects",
                phase=Phase.LIST,
                body=body,
            )

        try:
            rules = [Rule.from_dict(r) for r in raw_rules] if raw_rules is not None else None
        except ListParseError as e:
            e.body = body
            raise

        return RuleListing(
            rules=rules,
            total_count=_optional_int(data, "totalCount", body),
            page_size=_optional_int(data, "pageSize", body),
            page_number=_optional_int(data, "pageNumber", body),
        )
