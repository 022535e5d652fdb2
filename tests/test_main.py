"""Tests for the Cloud Functions entry points."""
import logging
import os
from unittest.mock import patch

import pytest
import responses
from flask import Flask, request

import main

EVENTS_URL = "https://www.eventbriteapi.com/v3/organizers/12345/events/"
CONTACTS_URL = "https://api.brevo.com/v3/contacts"


@pytest.fixture
def app():
    return Flask(__name__)


@pytest.fixture(autouse=True)
def mock_env():
    env_vars = {'EVENTBRITE_API_TOKEN': 'eb-token', 'BREVO_API_KEY': 'brevo-key'}
    with patch.dict(os.environ, env_vars, clear=True):
        main.get_gateway.cache_clear()
        yield env_vars
    main.get_gateway.cache_clear()


class TestCloudFunctions:
    """Test cases for the Cloud Functions handlers."""

    @responses.activate
    def test_eventbrite(self, app):
        responses.add(responses.GET, EVENTS_URL, json={'events': []}, status=200)

        with app.test_request_context('/?organizerId=12345', method='GET'):
            body, status, headers = main.eventbrite(request)

        assert status == 200
        assert body == {'events': []}
        assert headers['Cache-Control'] == 'public, max-age=300'

    def test_eventbrite_missing_organizer(self, app):
        with app.test_request_context('/', method='GET'):
            body, status, headers = main.eventbrite(request)

        assert status == 400
        assert body == {'error': 'Organizer ID required'}
        assert headers['Access-Control-Allow-Origin'] == '*'

    @responses.activate
    def test_brevo_subscribe_duplicate(self, app):
        responses.add(
            responses.POST,
            CONTACTS_URL,
            json={'code': 'duplicate_parameter', 'message': 'Contact already exist'},
            status=400
        )

        with app.test_request_context('/', method='POST', json={'email': 'a@b.com'}):
            body, status, headers = main.brevo_subscribe(request)

        assert status == 200
        assert body == {'success': True, 'message': 'Already subscribed', 'id': 'existing'}

    def test_brevo_subscribe_preflight(self, app):
        with app.test_request_context('/', method='OPTIONS'):
            body, status, headers = main.brevo_subscribe(request)

        assert status == 204
        assert body == ''

    @patch('main.setup_logging')
    def test_logging_output(self, mock_setup_logging, app, caplog):
        """Test that initialization and request completion are logged."""
        with caplog.at_level(logging.INFO, logger='main'):
            with app.test_request_context('/', method='GET'):
                main.eventbrite(request)

        log_messages = [record.message for record in caplog.records]
        assert any('Proxy gateway initialized' in msg for msg in log_messages)
        assert any('Proxy request completed' in msg for msg in log_messages)
        mock_setup_logging.assert_called_once_with('INFO')
