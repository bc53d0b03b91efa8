"""Shared GET helper for the remote service clients."""

import logging
from typing import Any

import httpx

from stayhub.exceptions import CollaboratorUnavailable

logger = logging.getLogger(__name__)


def build_http_client(base_url: str, timeout_seconds: float) -> httpx.AsyncClient:
    """Create a pooled async client for one remote service."""
    timeout = httpx.Timeout(timeout=timeout_seconds, connect=min(timeout_seconds, 5.0))
    return httpx.AsyncClient(base_url=base_url, timeout=timeout, headers={"Accept": "application/json"})


async def get_json(
    client: httpx.AsyncClient,
    service: str,
    path: str,
    params: dict[str, Any] | None = None,
) -> Any | None:
    """GET ``path`` and return the decoded JSON body.

    Returns ``None`` when the remote service answers 404 so callers can tell
    "does not exist" apart from a failure.

    Raises:
        CollaboratorUnavailable: On transport errors, timeouts, any other
            non-2xx status, or a body that is not JSON.
    """
    try:
        response = await client.get(path, params=params)
    except httpx.HTTPError as exc:
        logger.error("%s service unreachable (GET %s): %s", service, path, exc)
        raise CollaboratorUnavailable(f"{service} service is unavailable") from exc

    if response.status_code == httpx.codes.NOT_FOUND:
        return None

    if response.is_error:
        logger.warning("%s service answered %s for GET %s", service, response.status_code, path)
        raise CollaboratorUnavailable(f"{service} service returned status {response.status_code}")

    try:
        return response.json()
    except ValueError as exc:
        logger.error("%s service returned a non-JSON body for GET %s", service, path)
        raise CollaboratorUnavailable(f"{service} service returned an invalid response") from exc
