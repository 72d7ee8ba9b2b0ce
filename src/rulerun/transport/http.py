"""
HTTP gateway for rulerun, built on requests.

- Sends one request per call, never retries
- Returns HttpResponse for every status code the server answers with
- Wraps requests exceptions into TransportError
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests

from rulerun.protocol.errors import TransportError
from rulerun.protocol.models import HttpResponse
from rulerun.transport.base import DEFAULT_TIMEOUT_SECONDS, Gateway

logger = logging.getLogger(__name__)


class HTTPGateway(Gateway):
    """
    Sends requests with the requests library.

    Without a session every call opens its own connection, so a single
    gateway can be shared freely between threads. Passing a
    requests.Session enables connection reuse; callers that do so own the
    session's thread-safety.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> HttpResponse:
        requester = self._session if self._session is not None else requests
        data = body.encode("utf-8") if body is not None else None

        logger.debug("%s %s", method, url)
        try:
            response = requester.request(
                method,
                url,
                data=data,
                headers=dict(headers),
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return HttpResponse(status_code=response.status_code, body=response.text)
