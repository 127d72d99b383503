from __future__ import annotations

import os

import uvicorn

from ..config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the unified FastAPI app.

    - UNIFIED_LLM_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - UNIFIED_LLM_SERVICE_PORT: port to bind (default 8092)
    - UNIFIED_LLM_SERVICE_RELOAD: "true" to enable auto-reload (default off)

    Providers and proxies are registered from ``UNIFIED_LLM_CONFIG_FILE``.
    """
    host = os.getenv("UNIFIED_LLM_SERVICE_HOST", SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("UNIFIED_LLM_SERVICE_PORT"), SERVICE_DEFAULT_PORT)
    reload_enabled = (os.getenv("UNIFIED_LLM_SERVICE_RELOAD") or "").lower() == "true"

    uvicorn.run(
        "unified_llm.service.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
