"""
Exceptions levées par le client Helix.

Aucune erreur n'est avalée par la librairie : elles remontent telles quelles
jusqu'à l'appelant (CLI, bot, ...), qui décide quoi en faire.
"""

from typing import Any, Optional


class HelixError(Exception):
    """Base class for every error raised by helixapi."""


class HelixRequestError(HelixError):
    """Helix answered with a non-2xx status."""

    def __init__(self, status: int, message: str, body: Optional[Any] = None, url: str = ""):
        self.status = status
        self.message = message
        self.body = body
        self.url = url
        super().__init__(f"Helix {url} failed with {status}: {message}")


class MissingTokenError(HelixError):
    """No access token available for the requested context."""


class MissingScopeError(HelixError):
    """The acting token carries none of the scopes of the required set."""

    def __init__(self, user_id: str, required_scopes):
        self.user_id = user_id
        self.required_scopes = list(required_scopes)
        super().__init__(
            f"Token of user {user_id} needs one of the scopes {self.required_scopes}"
        )


class InvalidTransportError(HelixError):
    """Transport can not be used the way it was requested."""


class UnknownTopicError(HelixError):
    """No EventSub topic registered under that name."""
