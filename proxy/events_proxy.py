"""Proxy endpoint for an organizer's Eventbrite events."""
import logging
from typing import Optional

from proxy.base_handler import BaseProxyHandler
from proxy.errors import ConfigurationError, UpstreamError
from proxy.models import ProxyRequest, ProxyResponse
from proxy.settings import Settings
from proxy.validators import parse_events_query
from upstream.eventbrite_client import EventbriteClient

logger = logging.getLogger(__name__)

CACHE_CONTROL = 'public, max-age=300'


class EventsProxy(BaseProxyHandler):
    """
    GET handler that forwards the upstream events payload unchanged.

    Upstream failures always become HTTP 500, whatever the upstream status
    was (404, 401, 429, ...).
    """

    ALLOWED_METHOD = 'GET'

    def __init__(self, settings: Settings, client: Optional[EventbriteClient] = None):
        super().__init__(settings)
        if client is None and settings.eventbrite_api_token:
            client = EventbriteClient(
                api_token=settings.eventbrite_api_token,
                user_agent=settings.user_agent,
                timeout=settings.timeout_seconds
            )
        self.client = client

    def process(self, request: ProxyRequest) -> ProxyResponse:
        query = parse_events_query(request.query)
        logger.info(f"Eventbrite proxy request for organizer: {query.organizer_id}")

        if self.client is None:
            logger.error('EVENTBRITE_API_TOKEN not found in environment variables')
            raise ConfigurationError(
                'API token not configured',
                hint='Set EVENTBRITE_API_TOKEN in the environment or .env file'
            )

        try:
            data = self.client.get_organizer_events(query.organizer_id)
        except UpstreamError as e:
            logger.error(
                f"Error fetching from Eventbrite: {e.message}",
                extra={'upstream_status': e.upstream_status}
            )
            return self.respond(
                request, 500, {'error': 'Failed to fetch events', 'details': e.message}
            )

        return self.respond(request, 200, data, {'Cache-Control': CACHE_CONTROL})
