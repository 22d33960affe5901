"""Auth middleware - resolves the caller from a Keycloak bearer token."""

import falcon.asgi

from doccontrol.infrastructure.auth.keycloak_provider import AuthenticatedUser, KeycloakProvider

ANONYMOUS = "anonymous"


class AuthMiddleware:
    """Sets req.context.user to an AuthenticatedUser, or None when the token is rejected.

    Without a Keycloak provider (local development) the caller is taken from the
    X-User-Id header, falling back to an anonymous user.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if self._keycloak is None:
            user_id = (req.get_header("X-User-Id") or "").strip() or ANONYMOUS
            req.context.user = AuthenticatedUser(user_id=user_id)
            return

        auth = req.get_header("Authorization") or ""
        if not auth.startswith("Bearer "):
            req.context.user = None
            return
        req.context.user = await self._keycloak.authenticate(auth[7:].strip())
