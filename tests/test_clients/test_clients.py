"""Tests for the apartment and user service clients against a mocked transport."""

from decimal import Decimal

import httpx
import pytest

from stayhub.clients.apartments import ApartmentClient, ApartmentInfo
from stayhub.clients.http import build_http_client, get_json
from stayhub.clients.users import UserClient
from stayhub.exceptions import CollaboratorUnavailable


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://remote")


class TestGetJson:
    async def test_returns_body(self):
        http = _client(lambda request: httpx.Response(200, json={"ok": True}))
        assert await get_json(http, "apartment", "/x") == {"ok": True}

    async def test_not_found_is_none(self):
        http = _client(lambda request: httpx.Response(404))
        assert await get_json(http, "apartment", "/x") is None

    @pytest.mark.parametrize("status_code", [400, 401, 500, 503])
    async def test_other_errors_raise(self, status_code):
        http = _client(lambda request: httpx.Response(status_code))
        with pytest.raises(CollaboratorUnavailable, match=f"status {status_code}"):
            await get_json(http, "apartment", "/x")

    async def test_transport_failure_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CollaboratorUnavailable, match="apartment service is unavailable"):
            await get_json(_client(handler), "apartment", "/x")

    async def test_non_json_body_raises(self):
        http = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(CollaboratorUnavailable):
            await get_json(http, "apartment", "/x")

    async def test_collaborator_error_maps_to_502(self):
        assert CollaboratorUnavailable("x").status_code == 502


class TestApartmentClient:
    async def test_maps_price_to_nightly_rate(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 7, "name": "Sea View Loft", "price": 120.5})

        apartment = await ApartmentClient(_client(handler)).get_apartment(7)

        assert apartment == ApartmentInfo(id=7, name="Sea View Loft", nightly_rate=Decimal("120.5"))
        assert seen[0].url.path == "/api/v1/apartments/7"

    async def test_unknown_apartment(self):
        client = ApartmentClient(_client(lambda request: httpx.Response(404)))
        assert await client.get_apartment(7) is None

    async def test_missing_price_raises(self):
        client = ApartmentClient(_client(lambda request: httpx.Response(200, json={"id": 7})))
        with pytest.raises(CollaboratorUnavailable):
            await client.get_apartment(7)


class TestUserClient:
    async def test_plain_id_body(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=12)

        assert await UserClient(_client(handler)).get_user_id_by_email("renter@example.com") == 12
        assert seen[0].url.path == "/api/v1/users/private"
        assert seen[0].url.params["email"] == "renter@example.com"

    async def test_object_body(self):
        client = UserClient(_client(lambda request: httpx.Response(200, json={"id": 3, "email": "a@b.c"})))
        assert await client.get_user_id_by_email("a@b.c") == 3

    async def test_unknown_email(self):
        client = UserClient(_client(lambda request: httpx.Response(404)))
        assert await client.get_user_id_by_email("ghost@example.com") is None

    async def test_server_error(self):
        client = UserClient(_client(lambda request: httpx.Response(500)))
        with pytest.raises(CollaboratorUnavailable):
            await client.get_user_id_by_email("renter@example.com")


def test_build_http_client_sets_base_url():
    http = build_http_client("http://apartments:8083", 2.0)
    assert str(http.base_url) == "http://apartments:8083"
    assert http.timeout.read == 2.0
