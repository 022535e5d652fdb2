"""Unit tests for shared response formatting."""
from proxy.errors import ConfigurationError, MethodNotAllowed, ValidationError
from proxy.responses import (
    cors_headers,
    error_response,
    json_response,
    preflight_response,
    resolve_allowed_origin,
)


class TestResolveAllowedOrigin:
    """Test cases for origin selection."""

    def test_any_origin_without_allow_list(self):
        assert resolve_allowed_origin('http://evil.test', ()) == '*'

    def test_wildcard_in_allow_list(self):
        assert resolve_allowed_origin('http://evil.test', ('*',)) == '*'

    def test_allow_listed_origin_echoed(self):
        allowed = ('http://127.0.0.1:5500', 'http://localhost:5500')
        assert resolve_allowed_origin('http://localhost:5500', allowed) == 'http://localhost:5500'

    def test_unlisted_origin_gets_first_allowed(self):
        allowed = ('http://127.0.0.1:5500', 'http://localhost:5500')
        assert resolve_allowed_origin('http://evil.test', allowed) == 'http://127.0.0.1:5500'
        assert resolve_allowed_origin(None, allowed) == 'http://127.0.0.1:5500'


class TestResponseHeaders:
    """Test cases for headers applied to every response."""

    def test_default_headers(self):
        """Test that CORS and content type headers are always present."""
        assert cors_headers(None, ()) == {
            'Access-Control-Allow-Origin': '*',
            'Content-Type': 'application/json'
        }

    def test_vary_header_with_allow_list(self):
        headers = cors_headers('http://localhost:5500', ('http://localhost:5500',))
        assert headers['Access-Control-Allow-Origin'] == 'http://localhost:5500'
        assert headers['Vary'] == 'Origin'

    def test_json_response_extra_headers(self):
        response = json_response(200, {'ok': True}, extra_headers={'Cache-Control': 'no-store'})

        assert response.status_code == 200
        assert response.body == {'ok': True}
        assert response.headers['Cache-Control'] == 'no-store'
        assert response.headers['Access-Control-Allow-Origin'] == '*'

    def test_preflight_response(self):
        response = preflight_response('POST, OPTIONS')

        assert response.status_code == 204
        assert response.body is None
        assert response.headers['Access-Control-Allow-Methods'] == 'POST, OPTIONS'
        assert response.headers['Access-Control-Allow-Headers'] == 'Content-Type'
        assert response.headers['Access-Control-Allow-Origin'] == '*'


class TestErrorResponse:
    """Test cases for converting errors to responses."""

    def test_validation_error(self):
        response = error_response(ValidationError('Organizer ID required'))

        assert response.status_code == 400
        assert response.body == {'error': 'Organizer ID required'}
        assert response.headers['Content-Type'] == 'application/json'

    def test_configuration_error_includes_hint(self):
        response = error_response(ConfigurationError('API token not configured', hint='Set it'))

        assert response.status_code == 500
        assert response.body == {'error': 'API token not configured', 'hint': 'Set it'}

    def test_method_not_allowed_sets_allow_header(self):
        response = error_response(MethodNotAllowed('GET', 'POST, OPTIONS'))

        assert response.status_code == 405
        assert response.body == {'error': 'Method Not Allowed'}
        assert response.headers['Allow'] == 'POST, OPTIONS'
