"""Pydantic models and decoding helpers for gateway request bodies."""
from __future__ import annotations
import json
from typing import Any

from pydantic import BaseModel, ConfigDict

class GenerateIn(BaseModel):
    """Body of POST /generate. Missing or null fields decode as empty strings."""
    model_config = ConfigDict(strict=True)

    model: str = ""
    prompt: str = ""

_DECODER = json.JSONDecoder()

def decode_generate(raw: bytes) -> GenerateIn:
    """
    Decode the first JSON value of a request body into GenerateIn.

    Lenient where a plain JSON decoder would be: anything after the first
    value is ignored, a top-level null is an empty object, null fields are
    left at their defaults and keys match field names case-insensitively
    (the last matching key wins).

    Args:
        raw: Request body bytes.

    Raises:
        ValueError: Invalid UTF-8 or JSON, a non-object value, or a
            non-string field. pydantic's ValidationError is a ValueError.
    """
    text = raw.decode("utf-8").lstrip()
    value, _ = _DECODER.raw_decode(text)
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")

    fields: dict[str, Any] = {}
    for key, item in value.items():
        name = key.casefold()
        if name in GenerateIn.model_fields and item is not None:
            fields[name] = item
    return GenerateIn.model_validate(fields)

def encode_payload(body: GenerateIn) -> bytes:
    """
    Build the upstream generate payload.

    Only model and prompt are forwarded; anything else the caller sent is dropped.

    Args:
        body: Decoded request body.

    Returns:
        JSON-encoded payload bytes.
    """
    payload = {"model": body.model, "prompt": body.prompt}
    return json.dumps(payload).encode("utf-8")
