"""Error taxonomy for the proxy handlers.

Every error carries the HTTP status it maps to at the handler boundary.
"""
from typing import Any, Dict, Optional


class ProxyError(Exception):
    """Base class for errors converted into a JSON error response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {'error': self.message}


class ValidationError(ProxyError):
    """Missing or malformed caller input."""

    status_code = 400


class MethodNotAllowed(ProxyError):
    """Request used an HTTP verb the endpoint does not accept."""

    status_code = 405

    def __init__(self, method: str, allowed: str):
        super().__init__('Method Not Allowed')
        self.method = method
        self.allowed = allowed


class ConfigurationError(ProxyError):
    """A server-side secret is missing. Never fixable by the caller."""

    status_code = 500

    def __init__(self, message: str, hint: str):
        super().__init__(message)
        self.hint = hint

    def to_body(self) -> Dict[str, Any]:
        return {'error': self.message, 'hint': self.hint}


class UpstreamError(ProxyError):
    """Third-party API call failed.

    Always surfaced as HTTP 500; the upstream status is kept only so that
    handlers can recognise specific upstream conditions.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        code: Optional[str] = None
    ):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.code = code
