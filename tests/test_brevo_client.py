"""Unit tests for BrevoClient."""
import json

import pytest
import responses
from requests.exceptions import Timeout

from proxy.errors import UpstreamError
from proxy.models import SubscriptionRequest
from upstream.brevo_client import BrevoClient

CONTACTS_URL = "https://api.brevo.com/v3/contacts"


@pytest.fixture
def client():
    return BrevoClient(api_key='brevo-key', timeout=10)


@pytest.fixture
def subscription():
    return SubscriptionRequest(
        email='a@b.com',
        attributes={'FIRSTNAME': 'Ada'},
        list_ids=[7]
    )


class TestBrevoClient:
    """Test cases for BrevoClient class."""

    @responses.activate
    def test_create_contact_success(self, client, subscription):
        """Test the upstream request body and headers."""
        responses.add(responses.POST, CONTACTS_URL, json={'id': 42}, status=201)

        assert client.create_contact(subscription) == {'id': 42}

        request = responses.calls[0].request
        assert request.headers['api-key'] == 'brevo-key'
        assert request.headers['Accept'] == 'application/json'
        assert 'Authorization' not in request.headers
        assert json.loads(request.body) == {
            'email': 'a@b.com',
            'attributes': {'FIRSTNAME': 'Ada'},
            'listIds': [7],
            'updateEnabled': True
        }

    @responses.activate
    def test_no_content_response(self, client, subscription):
        """Test that an empty 204 body is treated as an empty payload."""
        responses.add(responses.POST, CONTACTS_URL, status=204)
        assert client.create_contact(subscription) == {}

    @responses.activate
    def test_duplicate_contact_error(self, client, subscription):
        """Test that the upstream error code is attached."""
        responses.add(
            responses.POST,
            CONTACTS_URL,
            json={'code': 'duplicate_parameter', 'message': 'Contact already exist'},
            status=400
        )

        with pytest.raises(UpstreamError) as exc_info:
            client.create_contact(subscription)

        assert exc_info.value.upstream_status == 400
        assert exc_info.value.code == 'duplicate_parameter'
        assert exc_info.value.message == 'Contact already exist'

    @responses.activate
    def test_error_without_message(self, client, subscription):
        responses.add(responses.POST, CONTACTS_URL, body='Service Unavailable', status=503)

        with pytest.raises(UpstreamError) as exc_info:
            client.create_contact(subscription)

        assert exc_info.value.message == 'Brevo API error: 503'
        assert exc_info.value.code is None

    @responses.activate
    def test_timeout(self, client, subscription):
        responses.add(responses.POST, CONTACTS_URL, body=Timeout('Request timed out'))

        with pytest.raises(UpstreamError) as exc_info:
            client.create_contact(subscription)

        assert 'Request timed out' in exc_info.value.message
        assert len(responses.calls) == 1
