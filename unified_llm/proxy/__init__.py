"""Proxy adapter package."""

from .client import ProxyProvider

__all__ = ["ProxyProvider"]
