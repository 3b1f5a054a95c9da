"""
Registry and discovery utilities for cloud providers.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Iterable

from cg_common.errors import ConfigurationError
from cg_common.settings import CloudgateSettings
from cg_core.catalog import ProviderRef
from cg_core.protocols import CloudProvider
from cg_providers.aws.provider import AwsProvider
from cg_providers.placeholders import azure_provider, gcp_provider

logger = logging.getLogger(__name__)
ENTRYPOINT_GROUP = "cloudgate.providers"


class ProviderRegistry:
    """In-memory registry of built-in and entry-point providers, keyed by id."""

    def __init__(
        self, providers: Iterable[Any] | None = None, *, discover: bool = True
    ) -> None:
        self._providers: dict[str, CloudProvider] = {}
        self._pending_entrypoints: dict[str, importlib.metadata.EntryPoint] = {}
        for provider in providers or ():
            self.register(provider)
        if discover:
            self._discover_entrypoint_providers()

    def register(self, provider: Any) -> None:
        """Register a new provider."""
        required = ("ref", "locator_options", "open_session")
        if not all(hasattr(provider, attr) for attr in required):
            raise TypeError(f"Unknown provider type: {type(provider)}")
        ref = provider.ref
        if ref.available and not ref.locator_fields:
            raise ConfigurationError(
                f"Provider '{ref.name}' declares no locator fields",
                context={"provider": ref.id},
            )
        if ref.id in self._providers:
            logger.debug("Replacing provider %s", ref.id)
        self._providers[ref.id] = provider

    def get(self, provider_id: str) -> CloudProvider:
        if provider_id not in self._providers and provider_id in self._pending_entrypoints:
            self._load_entrypoint(provider_id)
        if provider_id not in self._providers:
            raise KeyError(f"Provider '{provider_id}' not found")
        return self._providers[provider_id]

    def refs(self) -> tuple[ProviderRef, ...]:
        """References for every provider, entry points included, in registration order."""
        self._load_pending_entrypoints()
        return tuple(provider.ref for provider in self._providers.values())

    def _discover_entrypoint_providers(self) -> None:
        """Collect entry points without importing them. Loaded on demand."""
        self._pending_entrypoints = discover_entrypoints()

    def _load_pending_entrypoints(self) -> None:
        for name in list(self._pending_entrypoints):
            self._load_entrypoint(name)

    def _load_entrypoint(self, name: str) -> None:
        entry_point = self._pending_entrypoints.pop(name, None)
        if entry_point is None:
            return
        try:
            loaded = entry_point.load()
            self.register(loaded() if isinstance(loaded, type) else loaded)
        except ImportError as exc:
            logger.debug(
                "Skipping provider entry point %s due to missing dependency: %s", name, exc
            )
        except Exception as exc:
            logger.warning("Failed to load provider entry point %s: %s", name, exc)


def discover_entrypoints(
    group: str = ENTRYPOINT_GROUP,
) -> dict[str, importlib.metadata.EntryPoint]:
    """Collect provider entry points by name; the first one registered wins."""
    try:
        entries = importlib.metadata.entry_points().select(group=group)
    except Exception as exc:
        logger.debug("Failed to read entry points for group %s: %s", group, exc)
        return {}
    pending: dict[str, importlib.metadata.EntryPoint] = {}
    for entry_point in entries:
        pending.setdefault(entry_point.name, entry_point)
    return pending


def builtin_providers(settings: CloudgateSettings | None = None) -> list[Any]:
    return [AwsProvider(settings), azure_provider(), gcp_provider()]


def create_registry(
    settings: CloudgateSettings | None = None, *, discover: bool = True
) -> ProviderRegistry:
    return ProviderRegistry(builtin_providers(settings), discover=discover)
