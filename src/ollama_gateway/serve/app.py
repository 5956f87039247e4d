"""FastAPI proxy in front of a local Ollama daemon.

Endpoints:
- POST /generate  { "model": "...", "prompt": "..." }
- GET /models

Both relay the upstream body unchanged as application/json.

`app` is the target for `uvicorn ollama_gateway.serve.app:app`; the managed
server in serve.server builds its own instance with create_app().
"""
from __future__ import annotations
import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from ollama_gateway.common.schema import decode_generate, encode_payload
from ollama_gateway.common.settings import GENERATE_URL, TAGS_URL
from ollama_gateway.serve import upstream

LOGGER = logging.getLogger("ollama_gateway.app")

def _error(message: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(message + "\n", status_code=status_code)

async def _forward(method: str, url: str, content: bytes | None = None) -> Response:
    """Call the daemon once and stream its body back, or report why we couldn't."""
    headers = {"Content-Type": "application/json"} if content is not None else None
    try:
        client, resp = await run_in_threadpool(
            upstream.open_stream, method, url, content, headers
        )
    except httpx.HTTPError as e:
        LOGGER.error("Ollama request failed: %s", e)
        return _error(f"Failed to call Ollama: {e}", 500)

    return StreamingResponse(
        upstream.relay(client, resp),
        status_code=200,
        media_type="application/json",
    )

async def generate(request: Request) -> Response:
    raw = await request.body()
    try:
        body = decode_generate(raw)
    except ValueError:
        return _error("Invalid request body", 400)

    try:
        payload = encode_payload(body)
    except (TypeError, ValueError) as e:
        LOGGER.error("Failed to marshal request: %s", e)
        return _error(f"Failed to marshal request: {e}", 500)

    return await _forward("POST", GENERATE_URL, payload)

async def list_models() -> Response:
    return await _forward("GET", TAGS_URL)

def create_app() -> FastAPI:
    """Build the app with its fixed route table.

    Docs routes are off so only the two proxy operations are served; anything
    else gets the framework's 404 or 405.
    """
    app = FastAPI(
        title="ollama-gateway",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_api_route("/generate", generate, methods=["POST"])
    app.add_api_route("/models", list_models, methods=["GET"])
    return app

app = create_app()
