"""Client for the user service."""

import httpx

from stayhub.clients.http import get_json
from stayhub.exceptions import CollaboratorUnavailable


class UserClient:
    """Resolves a caller's email to their user id."""

    service_name = "user"

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def get_user_id_by_email(self, email: str) -> int | None:
        """Return the id of the user with ``email``, or ``None`` if there is none."""
        body = await get_json(self.http, self.service_name, "/api/v1/users/private", params={"email": email})
        if body is None:
            return None

        try:
            return int(body["id"] if isinstance(body, dict) else body)
        except (KeyError, TypeError, ValueError) as exc:
            raise CollaboratorUnavailable("user service returned an invalid user id") from exc

    async def aclose(self) -> None:
        await self.http.aclose()
