"""Data models for proxied requests and responses."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ProxyRequest:
    """Normalized inbound request built by every deployment shell."""
    method: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    @property
    def origin(self) -> Optional[str]:
        return self.headers.get('origin')


@dataclass
class ProxyResponse:
    """Normalized outbound response translated back by the shells."""
    status_code: int
    headers: Dict[str, str]
    body: Optional[Dict[str, Any]]


@dataclass
class EventsQuery:
    """Validated query for an organizer's events."""
    organizer_id: str


@dataclass
class SubscriptionRequest:
    """Validated newsletter subscription payload."""
    email: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    list_ids: List[Any] = field(default_factory=list)
    update_enabled: bool = True

    def to_contact_payload(self) -> Dict[str, Any]:
        """Body for the contact-creation call."""
        return {
            'email': self.email,
            'attributes': self.attributes,
            'listIds': self.list_ids,
            'updateEnabled': self.update_enabled
        }


@dataclass
class SubscriptionResult:
    """Result returned to the subscription widget."""
    success: bool
    message: str
    id: Any

    def to_dict(self) -> Dict[str, Any]:
        return {'success': self.success, 'message': self.message, 'id': self.id}
