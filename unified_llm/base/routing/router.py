"""Registry and facade for unified chat completions.

The :class:`Router` owns the set of registered vendor providers and
user-defined proxies, resolves a model identifier to one backend and
delegates the call to it. It never retries and never falls back to a second
backend: the first resolution is final.

Example usage:
    router = Router()
    router.register_provider("openai", {"api_key": "sk-..."})
    router.create_proxy("http://localhost:4000", name="local", models=["llama-3"])

    response = router.completion({"model": "gpt-4o", "messages": [...]})
    with router.stream_completion({"model": "anthropic/claude-3-haiku", "messages": [...]}) as stream:
        for chunk in stream:
            ...
"""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ...config.defaults import PROXY_WILDCARD
from ..cancellation import CancellationToken
from ..dto.completion import CompletionRequestDTO, coerce_request
from ..errors import ProviderNotFoundError
from ..factory import ProviderFactory
from ..http import HttpTransport
from ..interfaces import CompletionProvider
from ..logging import get_logger, log_event
from ..models import ProviderConfig, ProxyConfig, Resolution
from ..streaming import CompletionStream
from .model_resolver import parse_model_identifier, provider_type_for_model

RequestLike = Union[CompletionRequestDTO, Mapping[str, Any]]


class Router:
    """Routes completion requests to registered providers and proxies.

    Resolution order for an identifier:
      1. Proxies, in registration order (model name, raw identifier or ``*``).
      2. The explicit ``provider/`` hint, when that provider is registered.
      3. The model-name prefix table.
      4. Each registered provider's ``supports_model``, in registration order.
    """

    def __init__(self, transport: Optional[HttpTransport] = None) -> None:
        self._transport = transport or HttpTransport()
        self._providers: Dict[str, CompletionProvider] = {}
        self._proxies: List[Tuple[ProxyConfig, CompletionProvider]] = []
        self._logger = get_logger("router")

    # Registration ------------------------------------------------------------
    def register_provider(
        self,
        provider_type: str,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        **options: Any,
    ) -> CompletionProvider:
        """Create and register the adapter for ``provider_type``.

        ``config`` may be a :class:`ProviderConfig` or a mapping with
        ``api_key`` / ``base_url`` / ``default_params`` (camelCase accepted);
        keyword options are merged over a mapping. Re-registering a type
        replaces the previous adapter while keeping its position in the
        ``supports_model`` scan.

        Raises:
            UnknownProviderError: No adapter exists for ``provider_type``.
        """
        ptype = provider_type.lower()
        if isinstance(config, ProviderConfig):
            cfg = config if config.type == ptype else replace(config, type=ptype)
        else:
            cfg = ProviderConfig.from_mapping(ptype, {**(config or {}), **options})
        adapter = ProviderFactory.create(cfg, self._transport)
        replaced = ptype in self._providers
        self._providers[ptype] = adapter
        log_event(self._logger, "provider.registered", provider=ptype, replaced=replaced or None)
        return adapter

    def register_adapter(self, provider_type: str, adapter: CompletionProvider) -> CompletionProvider:
        """Register an already constructed adapter under ``provider_type``."""
        if not isinstance(adapter, CompletionProvider):
            raise TypeError(f"adapter for '{provider_type}' does not implement CompletionProvider")
        ptype = provider_type.lower()
        self._providers[ptype] = adapter
        log_event(self._logger, "provider.registered", provider=ptype, custom=True)
        return adapter

    def register_proxy(self, config: ProxyConfig) -> CompletionProvider:
        """Append a proxy; proxies are consulted before vendor providers."""
        from ...proxy.client import ProxyProvider

        adapter = ProxyProvider(config, self._transport)
        self._proxies.append((config, adapter))
        return adapter

    def create_proxy(
        self,
        url: str,
        *,
        name: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        models: Sequence[str] = (PROXY_WILDCARD,),
        proxy_model: Optional[str] = None,
    ) -> CompletionProvider:
        """Build a :class:`ProxyConfig` and register it (see :meth:`register_proxy`)."""
        config = ProxyConfig(
            name=name or url,
            url=url,
            headers=dict(headers or {}),
            models=tuple(models),
            proxy_model=proxy_model,
        )
        return self.register_proxy(config)

    @property
    def providers(self) -> Mapping[str, CompletionProvider]:
        """Read-only view of registered providers keyed by type."""
        return MappingProxyType(self._providers)

    @property
    def proxies(self) -> Tuple[ProxyConfig, ...]:
        """Registered proxy configurations in evaluation order."""
        return tuple(cfg for cfg, _ in self._proxies)

    # Resolution ----------------------------------------------------------------
    def resolve(self, identifier: str) -> Resolution:
        """Select the backend and outgoing model name for ``identifier``."""
        parsed = parse_model_identifier(identifier)
        model = parsed.model
        resolution, via = self._resolve(identifier, parsed.provider, model)
        log_event(
            self._logger,
            "route.resolve",
            level=logging.DEBUG,
            identifier=identifier,
            via=via,
            provider=resolution.adapter.provider_name if resolution.adapter is not None else None,
            model=resolution.model,
        )
        return resolution

    def _resolve(self, identifier: str, hint: Optional[str], model: str) -> Tuple[Resolution, str]:
        for cfg, adapter in self._proxies:
            if cfg.matches(model, identifier):
                return Resolution(adapter, cfg.proxy_model or model), "proxy"

        if hint and hint in self._providers:
            return Resolution(self._providers[hint], model), "explicit"

        ptype = provider_type_for_model(model)
        if ptype and ptype in self._providers:
            return Resolution(self._providers[ptype], model), "prefix"

        for adapter in self._providers.values():
            if adapter.supports_model(model):
                return Resolution(adapter, model), "supports_model"

        return Resolution(None, model), "none"

    def _route(self, request: RequestLike) -> Tuple[CompletionProvider, CompletionRequestDTO]:
        req = coerce_request(request)
        resolution = self.resolve(req.model)
        if resolution.adapter is None:
            raise ProviderNotFoundError(message=f"No provider found for model: {req.model}", model=req.model)
        return resolution.adapter, req.with_model(resolution.model)

    # Facade ------------------------------------------------------------------
    def completion(self, request: RequestLike) -> Dict[str, Any]:
        """Route a buffered completion and return the backend's canonical response.

        Raises:
            pydantic.ValidationError: ``request`` is not a valid canonical request.
            ProviderNotFoundError: No backend resolves the model.
        """
        adapter, req = self._route(request)
        return adapter.completion(req)

    def stream_completion(
        self,
        request: RequestLike,
        cancellation: Optional[CancellationToken] = None,
    ) -> CompletionStream:
        """Route a streamed completion.

        Resolution happens immediately, so ``ProviderNotFoundError`` is raised
        by this call; the HTTP request is sent on the first pull.
        """
        adapter, req = self._route(request)
        token = cancellation or CancellationToken()
        chunks = iter(adapter.stream_completion(req, token))
        return CompletionStream(chunks, token, provider=adapter.provider_name, model=req.model)


__all__ = ["Router"]
