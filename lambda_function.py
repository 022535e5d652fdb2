"""AWS Lambda / Netlify Functions handlers for the events and subscription proxies."""
import base64
import binascii
import json
import logging
import time
from functools import lru_cache
from typing import Any, Dict, Optional

from proxy.gateway import ProxyGateway
from proxy.logging_setup import setup_logging
from proxy.models import ProxyRequest, ProxyResponse
from proxy.settings import Settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_gateway() -> ProxyGateway:
    """
    Build the handlers once per container from environment variables.

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


def to_proxy_request(event: Dict[str, Any]) -> ProxyRequest:
    """
    Normalize an API Gateway (REST or HTTP API) proxy event.

    Args:
        event: Lambda event payload

    Returns:
        ProxyRequest with lower-cased header names
    """
    method = event.get('httpMethod')
    if not method:
        method = event.get('requestContext', {}).get('http', {}).get('method', '')

    body = event.get('body')
    if body is not None and event.get('isBase64Encoded'):
        body = _decode_body(body)

    headers = {
        name.lower(): value
        for name, value in (event.get('headers') or {}).items()
    }

    return ProxyRequest(
        method=method,
        query=dict(event.get('queryStringParameters') or {}),
        headers=headers,
        body=body
    )


def _decode_body(body: str) -> str:
    # Undecodable bodies are passed on as text so the handler rejects them.
    try:
        raw = base64.b64decode(body)
    except (binascii.Error, ValueError):
        logger.warning("Request body flagged as base64 could not be decoded")
        return body
    return raw.decode('utf-8', errors='replace')


def to_lambda_response(response: ProxyResponse) -> Dict[str, Any]:
    return {
        'statusCode': response.status_code,
        'headers': response.headers,
        'body': json.dumps(response.body) if response.body is not None else ''
    }


def event_path(event: Dict[str, Any]) -> Optional[str]:
    return event.get('path') or event.get('rawPath')


def events_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point for the Eventbrite events proxy."""
    return _invoke('events', event)


def subscribe_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point for the Brevo subscription proxy."""
    return _invoke('subscription', event)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Single-function entry point that routes on the request path.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        Response dict with statusCode, headers and JSON body
    """
    gateway = get_gateway()
    start_time = time.time()
    request = to_proxy_request(event)
    path = event_path(event)

    response = gateway.dispatch(path, request)
    _log_completion(path, request, response, start_time)
    return to_lambda_response(response)


def _invoke(handler_name: str, event: Dict[str, Any]) -> Dict[str, Any]:
    gateway = get_gateway()
    start_time = time.time()
    request = to_proxy_request(event)

    response = getattr(gateway, handler_name).handle(request)
    _log_completion(event_path(event), request, response, start_time)
    return to_lambda_response(response)


def _log_completion(
    path: Optional[str],
    request: ProxyRequest,
    response: ProxyResponse,
    start_time: float
) -> None:
    duration = time.time() - start_time
    logger.info(
        "Proxy request completed",
        extra={
            'path': path,
            'method': request.method,
            'status_code': response.status_code,
            'duration_seconds': round(duration, 2)
        }
    )
