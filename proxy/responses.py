"""Shared response formatting and CORS headers for all proxy endpoints."""
from typing import Any, Dict, Optional, Sequence

from proxy.errors import MethodNotAllowed, ProxyError
from proxy.models import ProxyResponse

ANY_ORIGIN = '*'
ALLOWED_HEADERS = 'Content-Type'


def resolve_allowed_origin(
    request_origin: Optional[str],
    allowed_origins: Sequence[str]
) -> str:
    """
    Pick the Access-Control-Allow-Origin value for a request.

    Args:
        request_origin: Origin header sent by the browser, if any
        allowed_origins: Configured allow-list; empty or containing '*'
            means any origin

    Returns:
        '*', the echoed request origin, or the first allow-listed origin
        when the request origin is not on the list
    """
    if not allowed_origins or ANY_ORIGIN in allowed_origins:
        return ANY_ORIGIN
    if request_origin in allowed_origins:
        return request_origin
    return allowed_origins[0]


def cors_headers(
    request_origin: Optional[str],
    allowed_origins: Sequence[str]
) -> Dict[str, str]:
    """Headers added to every response, success or failure."""
    origin = resolve_allowed_origin(request_origin, allowed_origins)
    headers = {
        'Access-Control-Allow-Origin': origin,
        'Content-Type': 'application/json'
    }
    if origin != ANY_ORIGIN:
        headers['Vary'] = 'Origin'
    return headers


def json_response(
    status_code: int,
    body: Optional[Dict[str, Any]],
    request_origin: Optional[str] = None,
    allowed_origins: Sequence[str] = (),
    extra_headers: Optional[Dict[str, str]] = None
) -> ProxyResponse:
    headers = cors_headers(request_origin, allowed_origins)
    if extra_headers:
        headers.update(extra_headers)
    return ProxyResponse(status_code=status_code, headers=headers, body=body)


def error_response(
    error: ProxyError,
    request_origin: Optional[str] = None,
    allowed_origins: Sequence[str] = ()
) -> ProxyResponse:
    """Convert a ProxyError into its status-coded JSON response."""
    extra = None
    if isinstance(error, MethodNotAllowed):
        extra = {'Allow': error.allowed}
    return json_response(
        error.status_code,
        error.to_body(),
        request_origin,
        allowed_origins,
        extra
    )


def preflight_response(
    allowed_methods: str,
    request_origin: Optional[str] = None,
    allowed_origins: Sequence[str] = ()
) -> ProxyResponse:
    """Answer a CORS preflight (OPTIONS) request."""
    return json_response(
        204,
        None,
        request_origin,
        allowed_origins,
        {
            'Access-Control-Allow-Methods': allowed_methods,
            'Access-Control-Allow-Headers': ALLOWED_HEADERS
        }
    )
