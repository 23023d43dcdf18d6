"""
Helix API client - transport HTTP (httpx) pour les endpoints Helix.

Les endpoints (eventsub, ...) ne font jamais d'I/O eux-mêmes : ils décrivent
leur requête dans un ApiCallOptions et la passent à `call_api()`.
N'importe quel objet qui expose `async call_api(options)` peut être injecté
à la place de HelixApiClient (tests, proxy, ...).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import httpx
from twitchAPI.type import AuthScope

from helixapi.auth_manager import AuthManager
from helixapi.errors import HelixRequestError, MissingTokenError

LOGGER = logging.getLogger(__name__)

HELIX_BASE_URL = "https://api.twitch.tv/helix/"


@dataclass
class ApiCallOptions:
    """Description of a single Helix request."""
    url: str                                          # Relative to the Helix base URL
    method: str = "GET"
    query: Dict[str, Any] = field(default_factory=dict)
    json_body: Optional[Dict[str, Any]] = None
    scopes: Optional[List[Union[str, AuthScope]]] = None  # Any-of scope set
    user_id: Optional[str] = None                     # User context of the request
    force_type: Optional[str] = None                  # "app", "user" or None


def clean_query(query: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the keys whose value is None (optional query parameters)."""
    return {key: value for key, value in query.items() if value is not None}


class HelixApiClient:
    """
    Default `call_api` collaborator built on httpx.

    Token selection:
        - force_type "app"  -> app access token
        - force_type "user" -> token of options.user_id (scopes checked)
        - no force_type     -> user token when one is stored for user_id,
                               app token otherwise
    """

    def __init__(
        self,
        client_id: str,
        auth: AuthManager,
        base_url: str = HELIX_BASE_URL,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.client_id = client_id
        self.auth = auth
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        LOGGER.debug(f"HelixApiClient init (base_url={base_url}, timeout={timeout}s)")

    async def __aenter__(self) -> "HelixApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    def _select_token(self, options: ApiCallOptions) -> str:
        if options.force_type == "app":
            return self.auth.get_app_token()

        if options.user_id is not None and (
            options.force_type == "user" or self.auth.has_user_token(options.user_id)
        ):
            return self.auth.get_user_token(options.user_id, options.scopes).access_token

        if options.force_type == "user":
            raise MissingTokenError(f"{options.method} {options.url} needs a user context")

        return self.auth.get_app_token()

    async def call_api(self, options: ApiCallOptions) -> Optional[Dict[str, Any]]:
        """
        Exécute une requête Helix et retourne le JSON décodé.

        Returns:
            Le corps JSON, ou None pour une réponse 204 (DELETE, ...)

        Raises:
            HelixRequestError: statut HTTP hors 2xx
            MissingTokenError / MissingScopeError: aucun token utilisable
        """
        token = self._select_token(options)
        headers = {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {token}",
        }

        LOGGER.debug(f"[HELIX] {options.method} {options.url} query={options.query}")
        response = await self._http.request(
            options.method,
            options.url,
            params=clean_query(options.query),
            json=options.json_body,
            headers=headers,
        )

        if not response.is_success:
            try:
                body = response.json()
                message = body.get("message", response.reason_phrase) if isinstance(body, dict) else response.reason_phrase
            except ValueError:
                body = response.text
                message = response.reason_phrase
            LOGGER.debug(f"[HELIX] {options.method} {options.url} -> {response.status_code} {message}")
            raise HelixRequestError(response.status_code, message, body, options.url)

        if response.status_code == 204 or not response.content:
            return None

        return response.json()
