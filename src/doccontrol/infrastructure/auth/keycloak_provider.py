"""Keycloak OIDC token introspection."""

import logging
from dataclasses import dataclass, field

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    """Caller identity taken from an active access token."""

    user_id: str
    email: str | None = None
    username: str | None = None
    realm_roles: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.username or self.email or self.user_id


class KeycloakProvider:
    """Validates bearer tokens against the realm's introspection endpoint."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    async def authenticate(self, token: str) -> AuthenticatedUser | None:
        """Return the token's user, or None for inactive or unverifiable tokens."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return AuthenticatedUser(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
