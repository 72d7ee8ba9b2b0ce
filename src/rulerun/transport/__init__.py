from .base import DEFAULT_TIMEOUT_SECONDS, Gateway, build_headers, join_url, path_segment
from .http import HTTPGateway

__all__ = ["DEFAULT_TIMEOUT_SECONDS", "Gateway", "HTTPGateway", "build_headers", "join_url", "path_segment"]
