"""
Transports EventSub : où Twitch livre les notifications d'une subscription.

- webhook   : callback HTTPS + secret (token app)
- websocket : session_id d'une connexion EventSub WebSocket (token user)
"""

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass
class WebhookTransport:
    callback: str
    secret: str
    method: str = "webhook"

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "callback": self.callback, "secret": self.secret}


@dataclass
class WebSocketTransport:
    session_id: str
    method: str = "websocket"

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "session_id": self.session_id}


TransportOptions = Union[WebhookTransport, WebSocketTransport, Dict[str, Any]]


def transport_to_dict(transport: TransportOptions) -> Dict[str, Any]:
    """JSON form of a transport; plain dicts are passed through."""
    if isinstance(transport, dict):
        return dict(transport)
    return transport.to_dict()


def transport_method(transport: TransportOptions) -> str:
    return transport_to_dict(transport).get("method", "")


def uses_app_auth(transport: TransportOptions) -> bool:
    # Seul le webhook fonctionne avec un token app
    return transport_method(transport) == "webhook"
