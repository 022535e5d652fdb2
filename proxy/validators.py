"""Input validation for the proxy endpoints.

Validators run before any upstream call and raise ``ValidationError`` on
bad input.
"""
import json
import logging
from typing import Any, Dict, Optional

from proxy.errors import ValidationError
from proxy.models import EventsQuery, SubscriptionRequest

logger = logging.getLogger(__name__)


def parse_events_query(query: Dict[str, str]) -> EventsQuery:
    """
    Build an EventsQuery from request query parameters.

    Args:
        query: Query string parameters of the inbound request

    Returns:
        EventsQuery for the requested organizer

    Raises:
        ValidationError: If organizerId is missing or empty
    """
    organizer_id = (query or {}).get('organizerId')
    if not organizer_id:
        raise ValidationError('Organizer ID required')
    return EventsQuery(organizer_id=organizer_id)


def parse_subscription_request(body: Optional[str]) -> SubscriptionRequest:
    """
    Build a SubscriptionRequest from a raw JSON request body.

    Only presence of the email address is checked here; its format is left
    to the browser widget.

    Args:
        body: Raw request body text

    Returns:
        SubscriptionRequest with defaults applied

    Raises:
        ValidationError: If the body is not a JSON object, the email is
            missing, or attributes is not an object
    """
    payload = _load_json_object(body)

    email = payload.get('email')
    if not email or not isinstance(email, str):
        raise ValidationError('Email address is required')

    attributes = payload.get('attributes') or {}
    if not isinstance(attributes, dict):
        raise ValidationError('attributes must be an object')

    return SubscriptionRequest(
        email=email,
        attributes=attributes,
        list_ids=payload.get('listIds') or [],
        update_enabled=payload.get('updateEnabled') is not False
    )


def _load_json_object(body: Optional[str]) -> Dict[str, Any]:
    try:
        payload = json.loads(body) if body is not None else None
    except ValueError as e:
        logger.warning(f"Rejected request body: {e}")
        raise ValidationError('Invalid JSON in request body')

    if not isinstance(payload, dict):
        raise ValidationError('Invalid JSON in request body')
    return payload
