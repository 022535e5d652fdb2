"""Client for the Eventbrite organizer events API."""
import logging
from typing import Any, Dict
from urllib.parse import quote

import requests

from proxy.errors import UpstreamError

logger = logging.getLogger(__name__)


class EventbriteClient:
    """Fetches live events for an organizer from Eventbrite."""

    BASE_URL = "https://www.eventbriteapi.com/v3"

    def __init__(self, api_token: str, user_agent: str, timeout: float = 30):
        """
        Initialize the Eventbrite client.

        Args:
            api_token: Private OAuth token sent as a bearer token
            user_agent: Client tag sent in the User-Agent header
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.api_token = api_token
        self.user_agent = user_agent
        self.timeout = timeout

    def events_url(self, organizer_id: str) -> str:
        return f"{self.BASE_URL}/organizers/{quote(organizer_id, safe='')}/events/"

    def get_organizer_events(self, organizer_id: str) -> Dict[str, Any]:
        """
        Fetch live events for an organizer, soonest first, with venues expanded.

        A single attempt is made; failures are not retried.

        Args:
            organizer_id: Eventbrite organizer identifier

        Returns:
            Upstream JSON payload, unchanged

        Raises:
            UpstreamError: On a transport failure, a non-2xx status, or a
                body that is not JSON
        """
        url = self.events_url(organizer_id)
        params = {
            'status': 'live',
            'order_by': 'start_asc',
            'expand': 'venue'
        }
        logger.info(f"Fetching from Eventbrite API: {url}")

        try:
            response = requests.get(
                url,
                params=params,
                headers={
                    'Authorization': f"Bearer {self.api_token}",
                    'User-Agent': self.user_agent
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Eventbrite request failed: {e}")
            raise UpstreamError(str(e))

        if not response.ok:
            logger.error(
                f"Eventbrite API error: {response.status_code}",
                extra={'upstream_body': response.text[:500]}
            )
            raise UpstreamError(
                f"Eventbrite API error: {response.status_code}",
                upstream_status=response.status_code
            )

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(
                'Eventbrite API returned invalid JSON',
                upstream_status=response.status_code
            )

        events = data.get('events') if isinstance(data, dict) else None
        logger.info(f"Successfully fetched {len(events or [])} events")
        return data
