"""
helixapi/
=========

Client Helix (API REST Twitch) centré sur la gestion des subscriptions EventSub.

Organisation:
- api_client.py : transport HTTP (httpx) + sélection du token (app / user)
- auth_manager.py : stockage des tokens et vérification des scopes
- pagination.py : pagination par curseur (itérateurs asynchrones paresseux)
- errors.py : exceptions
- eventsub/ : subscriptions EventSub (liste, création, suppression, catalogue)
"""

from helixapi.api_client import ApiCallOptions, HelixApiClient
from helixapi.auth_manager import AuthManager, TokenInfo
from helixapi.errors import (
    HelixError,
    HelixRequestError,
    InvalidTransportError,
    MissingScopeError,
    MissingTokenError,
    UnknownTopicError,
)
from helixapi.pagination import HelixPagination

__all__ = [
    "ApiCallOptions",
    "AuthManager",
    "HelixApiClient",
    "HelixError",
    "HelixPagination",
    "HelixRequestError",
    "InvalidTransportError",
    "MissingScopeError",
    "MissingTokenError",
    "TokenInfo",
    "UnknownTopicError",
]
