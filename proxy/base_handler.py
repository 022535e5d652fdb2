"""Request-handling boundary shared by the proxy endpoints."""
import logging
from typing import Any, Dict, Optional

from proxy.errors import MethodNotAllowed, ProxyError
from proxy.models import ProxyRequest, ProxyResponse
from proxy.responses import error_response, json_response, preflight_response
from proxy.settings import Settings

logger = logging.getLogger(__name__)


class BaseProxyHandler:
    """
    Turns a ProxyRequest into a ProxyResponse.

    Subclasses set ``ALLOWED_METHOD`` and implement ``process``. Every
    error raised by ``process`` is converted here into a JSON error body
    with CORS headers; nothing propagates to the deployment shell.
    """

    ALLOWED_METHOD = 'GET'

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def allowed_methods(self) -> str:
        return f"{self.ALLOWED_METHOD}, OPTIONS"

    def handle(self, request: ProxyRequest) -> ProxyResponse:
        """
        Handle one request end to end.

        Args:
            request: Normalized inbound request

        Returns:
            ProxyResponse; never raises
        """
        method = (request.method or '').upper()
        origin = request.origin
        allowed_origins = self.settings.allowed_origins

        if method == 'OPTIONS':
            return preflight_response(self.allowed_methods, origin, allowed_origins)

        try:
            if method != self.ALLOWED_METHOD:
                raise MethodNotAllowed(method, self.allowed_methods)
            return self.process(request)
        except ProxyError as e:
            logger.warning(
                f"{type(self).__name__} rejected request: {e.message}",
                extra={'status_code': e.status_code, 'error_type': type(e).__name__}
            )
            return error_response(e, origin, allowed_origins)
        except Exception as e:
            logger.error(
                f"Unhandled error in {type(self).__name__}: {e}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return json_response(
                500, {'error': 'Internal server error'}, origin, allowed_origins
            )

    def process(self, request: ProxyRequest) -> ProxyResponse:
        raise NotImplementedError

    def respond(
        self,
        request: ProxyRequest,
        status_code: int,
        body: Dict[str, Any],
        extra_headers: Optional[Dict[str, str]] = None
    ) -> ProxyResponse:
        return json_response(
            status_code,
            body,
            request.origin,
            self.settings.allowed_origins,
            extra_headers
        )
