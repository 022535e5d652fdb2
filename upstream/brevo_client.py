"""Client for the Brevo contacts API."""
import logging
from typing import Any, Dict

import requests

from proxy.errors import UpstreamError
from proxy.models import SubscriptionRequest

logger = logging.getLogger(__name__)


class BrevoClient:
    """Creates or updates newsletter contacts in Brevo."""

    CONTACTS_URL = "https://api.brevo.com/v3/contacts"

    def __init__(self, api_key: str, timeout: float = 30):
        """
        Initialize the Brevo client.

        Args:
            api_key: Brevo API key, sent in the api-key header
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.api_key = api_key
        self.timeout = timeout

    def create_contact(self, subscription: SubscriptionRequest) -> Dict[str, Any]:
        """
        Create a contact and add it to the requested mailing lists.

        Args:
            subscription: Validated subscription request

        Returns:
            Upstream JSON payload (contains the contact ``id``)

        Raises:
            UpstreamError: On a transport failure or non-2xx status. The
                upstream status and error ``code`` are attached.
        """
        logger.info(f"Creating/updating contact in Brevo: {subscription.email}")

        try:
            response = requests.post(
                self.CONTACTS_URL,
                json=subscription.to_contact_payload(),
                headers={
                    'Accept': 'application/json',
                    'Content-Type': 'application/json',
                    'api-key': self.api_key
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Brevo request failed: {e}")
            raise UpstreamError(str(e))

        data = self._json_or_empty(response)

        if not response.ok:
            logger.error(
                f"Brevo API error: {response.status_code}",
                extra={'upstream_code': data.get('code')}
            )
            raise UpstreamError(
                data.get('message') or f"Brevo API error: {response.status_code}",
                upstream_status=response.status_code,
                code=data.get('code')
            )

        return data

    @staticmethod
    def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
        # Brevo answers some successful updates with 204 and no body.
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
