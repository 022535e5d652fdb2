"""Flask application serving the proxy endpoints for local development."""
import json
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from proxy.gateway import ProxyGateway
from proxy.logging_setup import setup_logging
from proxy.models import ProxyRequest, ProxyResponse
from proxy.settings import Settings

logger = logging.getLogger(__name__)

EVENTS_ROUTE = '/api/eventbrite'
SUBSCRIBE_ROUTE = '/api/brevo/subscribe'
DEFAULT_PORT = 3001


def to_proxy_request(flask_request) -> ProxyRequest:
    """Normalize a Flask/Werkzeug request."""
    return ProxyRequest(
        method=flask_request.method,
        query=flask_request.args.to_dict(),
        headers={name.lower(): value for name, value in flask_request.headers.items()},
        body=flask_request.get_data(as_text=True)
    )


def to_flask_response(response: ProxyResponse) -> Response:
    body = json.dumps(response.body) if response.body is not None else ''
    return Response(body, status=response.status_code, headers=response.headers)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """
    Create the Flask app.

    Args:
        settings: Configuration to inject (default: read from environment)

    Returns:
        Configured Flask application
    """
    settings = settings or Settings.from_env()
    gateway = ProxyGateway(settings)

    app = Flask(__name__)
    app.config['PROXY_GATEWAY'] = gateway

    @app.route('/', methods=['GET'])
    def health():
        return jsonify({
            'message': 'Eventbrite Proxy Server Running',
            'status': 'healthy',
            'endpoints': [EVENTS_ROUTE, SUBSCRIBE_ROUTE]
        })

    # Every verb is routed through so the handlers answer 405 themselves.
    all_methods = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

    @app.route(EVENTS_ROUTE, methods=all_methods, provide_automatic_options=False)
    def eventbrite():
        return to_flask_response(gateway.events.handle(to_proxy_request(request)))

    @app.route(SUBSCRIBE_ROUTE, methods=all_methods, provide_automatic_options=False)
    def brevo_subscribe():
        return to_flask_response(gateway.subscription.handle(to_proxy_request(request)))

    return app


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    port = int(os.environ.get('PORT', DEFAULT_PORT))
    logger.info(f"Eventbrite proxy server running on http://localhost:{port}")
    logger.info(f"Environment: {os.environ.get('FLASK_ENV', 'development')}")
    logger.info(
        f"Eventbrite API Token: {'Yes' if settings.eventbrite_api_token else 'No'}"
    )
    logger.info(f"Brevo API Key: {'Yes' if settings.brevo_api_key else 'No'}")

    create_app(settings).run(host='127.0.0.1', port=port)


if __name__ == '__main__':
    main()
