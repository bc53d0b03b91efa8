"""Client for the apartment service."""

from dataclasses import dataclass
from decimal import Decimal

import httpx

from stayhub.clients.http import get_json
from stayhub.exceptions import CollaboratorUnavailable


@dataclass(frozen=True)
class ApartmentInfo:
    """The slice of an apartment the booking service needs."""

    id: int
    name: str
    nightly_rate: Decimal


class ApartmentClient:
    """Looks apartments up through ``GET /api/v1/apartments/{id}``."""

    service_name = "apartment"

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def get_apartment(self, apartment_id: int) -> ApartmentInfo | None:
        """Return the apartment, or ``None`` if the apartment service does not know it."""
        body = await get_json(self.http, self.service_name, f"/api/v1/apartments/{apartment_id}")
        if body is None:
            return None

        try:
            return ApartmentInfo(
                id=int(body["id"]),
                name=str(body.get("name") or ""),
                nightly_rate=Decimal(str(body["price"])),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise CollaboratorUnavailable("apartment service returned an invalid apartment") from exc

    async def aclose(self) -> None:
        await self.http.aclose()
