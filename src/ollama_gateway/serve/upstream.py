"""Streaming calls to the local Ollama daemon."""
from __future__ import annotations
import logging
from collections.abc import Iterator

import httpx

from ollama_gateway.common.settings import OLLAMA_TIMEOUT

LOGGER = logging.getLogger("ollama_gateway.upstream")

def _make_client() -> httpx.Client:
    return httpx.Client(timeout=OLLAMA_TIMEOUT)

def open_stream(
    method: str,
    url: str,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> tuple[httpx.Client, httpx.Response]:
    """
    Send one request upstream without reading its body.

    Args:
        method: HTTP method.
        url: Absolute upstream URL.
        content: Optional request body.
        headers: Optional request headers.

    Returns:
        The client and the open response; both must be released via relay().

    Raises:
        httpx.HTTPError: The upstream could not be reached. The client is
            already closed when this propagates.
    """
    client = _make_client()
    request = client.build_request(method, url, content=content, headers=headers)
    try:
        response = client.send(request, stream=True)
    except httpx.HTTPError:
        client.close()
        raise
    LOGGER.debug("%s %s -> %s", method, url, response.status_code)
    return client, response

def relay(client: httpx.Client, response: httpx.Response) -> Iterator[bytes]:
    """Yield the upstream body, then release the connection.

    Content-Encoding such as gzip is undone here since the caller is sent
    plain application/json; the bytes are otherwise unchanged.
    """
    try:
        yield from response.iter_bytes()
    except (httpx.HTTPError, httpx.StreamError) as e:
        # Headers are already sent, so the caller just sees a truncated body.
        LOGGER.error("Upstream stream aborted: %s", e)
    finally:
        response.close()
        client.close()
