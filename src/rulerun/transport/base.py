from __future__ import annotations

"""
Base gateway interface for rulerun.

A gateway is the boundary between the controller/clients and the wire:

    (method, url, headers, body) -> HttpResponse(status_code, body)

Gateways DO NOT:
  - interpret status codes
  - parse response bodies
  - retry

Gateways ONLY:
  - deliver one request
  - return the raw status code and body
  - raise TransportError when no response was obtained

Everything else is handled by the execution controller and the listing and
trigger clients.
"""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional
from urllib.parse import quote

from rulerun.protocol.models import HttpResponse

DEFAULT_TIMEOUT_SECONDS = 30.0


def build_headers(credential: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {credential}",
        "Content-Type": "application/json",
    }


def path_segment(value: str) -> str:
    """Percent-encode one URL path segment, including '/', '?' and '#'."""
    return quote(value, safe="")


def join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class Gateway(ABC):
    """
    Abstract base class for request executors.

    Implementations must be safe to share between concurrent invocations:
    no per-call state may live on the instance.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> HttpResponse:
        """
        Send one request and return its status code and body.

        A non-2xx status is returned, not raised. Connection, TLS, DNS and
        I/O failures are raised as TransportError.
        """
        raise NotImplementedError
