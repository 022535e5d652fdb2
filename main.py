"""Google Cloud Functions entry points for the events and subscription proxies.

Deploy with ``--entry-point eventbrite`` or ``--entry-point brevo_subscribe``.
"""
import logging
import time
from functools import lru_cache
from typing import Any, Dict, Tuple, Union

from flask import Request

from proxy.gateway import ProxyGateway
from proxy.logging_setup import setup_logging
from proxy.models import ProxyResponse
from proxy.settings import Settings
from server.app import to_proxy_request

logger = logging.getLogger(__name__)

FunctionResult = Tuple[Union[Dict[str, Any], str], int, Dict[str, str]]


@lru_cache(maxsize=None)
def get_gateway() -> ProxyGateway:
    """
    Build the handlers once per function instance from environment variables.

    Returns:
        Shared ProxyGateway instance
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger.info(
        "Proxy gateway initialized",
        extra={
            'eventbrite_configured': bool(settings.eventbrite_api_token),
            'brevo_configured': bool(settings.brevo_api_key)
        }
    )
    return ProxyGateway(settings)


def _to_function_result(response: ProxyResponse) -> FunctionResult:
    """Convert a ProxyResponse into the (body, status, headers) tuple Flask accepts."""
    body = response.body if response.body is not None else ''
    return body, response.status_code, response.headers


def _invoke(handler_name: str, request: Request) -> FunctionResult:
    gateway = get_gateway()
    start_time = time.time()
    proxy_request = to_proxy_request(request)

    response = getattr(gateway, handler_name).handle(proxy_request)

    duration = time.time() - start_time
    logger.info(
        "Proxy request completed",
        extra={
            'path': request.path,
            'method': proxy_request.method,
            'status_code': response.status_code,
            'duration_seconds': round(duration, 2)
        }
    )
    return _to_function_result(response)


def eventbrite(request: Request) -> FunctionResult:
    """HTTP function for the Eventbrite events proxy."""
    return _invoke('events', request)


def brevo_subscribe(request: Request) -> FunctionResult:
    """HTTP function for the Brevo subscription proxy."""
    return _invoke('subscription', request)
