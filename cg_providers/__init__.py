"""Cloud provider implementations consumed by the wizard."""

from cg_providers.api import ProviderRegistry, create_registry

__all__ = ["ProviderRegistry", "create_registry"]
