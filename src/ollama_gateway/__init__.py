"""
Ollama Gateway package.

Provides:
- A FastAPI proxy exposing /generate and /models on top of a local Ollama daemon
- A uvicorn-backed server with signal-driven, bounded graceful shutdown
"""
