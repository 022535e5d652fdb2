"""Bundle of proxy handlers built once per process."""
import logging
from typing import Optional

from proxy.base_handler import BaseProxyHandler
from proxy.events_proxy import EventsProxy
from proxy.models import ProxyRequest, ProxyResponse
from proxy.responses import json_response
from proxy.settings import Settings
from proxy.subscription_proxy import SubscriptionProxy

logger = logging.getLogger(__name__)

EVENTS_PATHS = ('/eventbrite',)
SUBSCRIPTION_PATHS = ('/brevo/subscribe', '/brevo-subscribe')


class ProxyGateway:
    """Holds the events and subscription handlers and routes paths to them."""

    def __init__(
        self,
        settings: Settings,
        events: Optional[EventsProxy] = None,
        subscription: Optional[SubscriptionProxy] = None
    ):
        self.settings = settings
        self.events = events or EventsProxy(settings)
        self.subscription = subscription or SubscriptionProxy(settings)

    def route(self, path: Optional[str]) -> Optional[BaseProxyHandler]:
        """
        Find the handler for a request path.

        Matches on the path suffix so that the same handlers serve
        ``/api/eventbrite`` and ``/.netlify/functions/eventbrite``.

        Args:
            path: Request path

        Returns:
            Matching handler, or None
        """
        path = (path or '').rstrip('/')
        if path.endswith(EVENTS_PATHS):
            return self.events
        if path.endswith(SUBSCRIPTION_PATHS):
            return self.subscription
        return None

    def dispatch(self, path: Optional[str], request: ProxyRequest) -> ProxyResponse:
        handler = self.route(path)
        if handler is None:
            logger.warning(f"No proxy route for path: {path}")
            return json_response(
                404,
                {'error': 'Not Found'},
                request.origin,
                self.settings.allowed_origins
            )
        return handler.handle(request)
