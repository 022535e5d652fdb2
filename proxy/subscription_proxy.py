"""Proxy endpoint for newsletter subscriptions through Brevo."""
import logging
from typing import Optional

from proxy.base_handler import BaseProxyHandler
from proxy.errors import ConfigurationError, UpstreamError
from proxy.models import ProxyRequest, ProxyResponse, SubscriptionResult
from proxy.settings import Settings
from proxy.validators import parse_subscription_request
from upstream.brevo_client import BrevoClient

logger = logging.getLogger(__name__)

DUPLICATE_CONTACT_CODE = 'duplicate_parameter'


class SubscriptionProxy(BaseProxyHandler):
    """
    POST handler that creates or updates a Brevo contact.

    A contact that already exists is reported as a successful subscription
    so that repeated sign-ups never show an error to the visitor.
    """

    ALLOWED_METHOD = 'POST'

    def __init__(self, settings: Settings, client: Optional[BrevoClient] = None):
        super().__init__(settings)
        if client is None and settings.brevo_api_key:
            client = BrevoClient(
                api_key=settings.brevo_api_key,
                timeout=settings.timeout_seconds
            )
        self.client = client

    def process(self, request: ProxyRequest) -> ProxyResponse:
        subscription = parse_subscription_request(request.body)
        logger.info(f"Brevo subscription request for: {subscription.email}")

        if self.client is None:
            logger.error('BREVO_API_KEY not found in environment variables')
            raise ConfigurationError(
                'Brevo API key not configured',
                hint='Set BREVO_API_KEY in the environment or .env file'
            )

        try:
            data = self.client.create_contact(subscription)
        except UpstreamError as e:
            if self.is_duplicate_contact(e):
                logger.info(f"Contact already subscribed: {subscription.email}")
                result = SubscriptionResult(True, 'Already subscribed', 'existing')
                return self.respond(request, 200, result.to_dict())

            logger.error(
                f"Error with Brevo subscription: {e.message}",
                extra={'upstream_status': e.upstream_status}
            )
            return self.respond(
                request, 500, {'error': 'Failed to subscribe', 'message': e.message}
            )

        logger.info(f"Successfully subscribed {subscription.email} to Brevo list")
        result = SubscriptionResult(True, 'Successfully subscribed', data.get('id'))
        return self.respond(request, 200, result.to_dict())

    @staticmethod
    def is_duplicate_contact(error: UpstreamError) -> bool:
        return error.upstream_status == 400 and error.code == DUPLICATE_CONTACT_CODE
