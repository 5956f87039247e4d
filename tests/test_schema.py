from __future__ import annotations

import json
import logging

import pytest

from ollama_gateway.common.logging_setup import setup_logging
from ollama_gateway.common.schema import decode_generate, encode_payload


def test_encode_payload_exact_fields() -> None:
    body = decode_generate(b'{"model": "llama2", "prompt": "hello", "raw": true}')
    assert json.loads(encode_payload(body)) == {"model": "llama2", "prompt": "hello"}


def test_missing_fields_default_to_empty() -> None:
    body = decode_generate(b'{"prompt": "hi"}')
    assert body.model == ""
    assert body.prompt == "hi"


def test_decode_ignores_trailing_data_and_nulls() -> None:
    body = decode_generate(b'{"MODEL": "llama2", "prompt": null} {"prompt": "x"}')
    assert body.model == "llama2"
    assert body.prompt == ""
    assert decode_generate(b"null").model == ""


@pytest.mark.parametrize("raw", [b"", b"{", b"true", b'{"model": false}', b'{"prompt": 1.5}'])
def test_decode_rejects(raw: bytes) -> None:
    with pytest.raises(ValueError):
        decode_generate(raw)


def test_setup_logging_accepts_level_names() -> None:
    setup_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    setup_logging("bogus")
    assert root.level == logging.INFO
