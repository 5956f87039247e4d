"""Environment-driven settings, read once at import."""
from __future__ import annotations
import os

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").rstrip("/")
GENERATE_URL = f"{OLLAMA_BASE_URL}/api/generate"
TAGS_URL = f"{OLLAMA_BASE_URL}/api/tags"

# Unset means the upstream call may block indefinitely.
_timeout = os.getenv("OLLAMA_TIMEOUT")
OLLAMA_TIMEOUT: float | None = float(_timeout) if _timeout else None

GATEWAY_HOST = os.getenv("GATEWAY_HOST", "0.0.0.0")
GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", "8080"))
SHUTDOWN_TIMEOUT = float(os.getenv("SHUTDOWN_TIMEOUT", "5"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
