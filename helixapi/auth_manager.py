"""
AuthManager
Stockage des tokens (app + users) utilisés par HelixApiClient.

Acquisition et refresh des tokens restent hors de ce module : on reçoit des
tokens déjà valides (config.yaml, variables d'environnement, ...).
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from twitchAPI.type import AuthScope

from helixapi.errors import MissingScopeError, MissingTokenError

LOGGER = logging.getLogger(__name__)

ScopeLike = Union[str, AuthScope]


@dataclass
class TokenInfo:
    """Info sur un token utilisateur"""
    user_id: str                     # ID Twitch
    access_token: str                # Token d'accès
    scopes: List[AuthScope] = field(default_factory=list)
    user_login: str = ""             # Nom du compte (optionnel)


def to_auth_scopes(scopes: Optional[Iterable[ScopeLike]]) -> List[AuthScope]:
    """Convert scope strings (or AuthScope members) to AuthScope."""
    return [AuthScope(s) for s in scopes or []]


class AuthManager:
    """
    Holds the app access token and the user tokens, keyed by user id.

    Scope sets are "any-of": a token satisfies a set if it carries at least
    one of its scopes.
    """

    def __init__(self, app_token: Optional[str] = None):
        self.app_token = app_token
        self.tokens: Dict[str, TokenInfo] = {}  # {user_id: TokenInfo}

    def add_user_token(
        self,
        user_id: str,
        access_token: str,
        scopes: Optional[Iterable[ScopeLike]] = None,
        user_login: str = "",
    ) -> TokenInfo:
        token_info = TokenInfo(
            user_id=str(user_id),
            access_token=access_token.replace("oauth:", ""),
            scopes=to_auth_scopes(scopes),
            user_login=user_login,
        )
        self.tokens[token_info.user_id] = token_info
        LOGGER.info(f"✅ Token ajouté pour user_id={token_info.user_id} ({len(token_info.scopes)} scopes)")
        return token_info

    def load_tokens(self, tokens: Dict[str, dict]) -> int:
        """
        Charge les tokens depuis la section `twitch.tokens` de config.yaml.

        Args:
            tokens: {user_id: {"access_token": ..., "scopes": [...], "login": ...}}

        Returns:
            Nombre de tokens chargés
        """
        for user_id, data in tokens.items():
            self.add_user_token(
                user_id,
                data["access_token"],
                data.get("scopes", []),
                data.get("login", ""),
            )
        return len(tokens)

    def has_user_token(self, user_id: str) -> bool:
        return str(user_id) in self.tokens

    def has_scope(self, user_id: str, scope: ScopeLike) -> bool:
        token_info = self.tokens.get(str(user_id))
        if token_info is None:
            return False
        return AuthScope(scope) in token_info.scopes

    def get_app_token(self) -> str:
        if not self.app_token:
            raise MissingTokenError("No app access token configured")
        return self.app_token

    def get_user_token(
        self,
        user_id: str,
        required_scopes: Optional[Iterable[ScopeLike]] = None,
    ) -> TokenInfo:
        """
        Returns the token of a user, checking the required scope set.

        Raises:
            MissingTokenError: no token stored for that user
            MissingScopeError: token has none of the required scopes
        """
        token_info = self.tokens.get(str(user_id))
        if token_info is None:
            raise MissingTokenError(f"No token registered for user {user_id}")

        required = to_auth_scopes(required_scopes)
        if required and not any(scope in token_info.scopes for scope in required):
            raise MissingScopeError(token_info.user_id, [s.value for s in required])

        return token_info

    def get_all_users(self) -> List[str]:
        """Retourne la liste de tous les users avec token"""
        return list(self.tokens.keys())
