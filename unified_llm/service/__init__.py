"""HTTP service exposing the router through an OpenAI-compatible API."""

from .app import build_router_from_config, create_app

__all__ = ["create_app", "build_router_from_config"]
