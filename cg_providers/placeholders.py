"""Providers that are listed but not implemented yet."""

from __future__ import annotations

from typing import NoReturn

from cg_common.errors import PreconditionError
from cg_core.catalog import ProviderRef
from cg_core.models import Locator


class PlaceholderProvider:
    """Shows up on the provider screen as "Coming Soon" and cannot be opened."""

    def __init__(self, provider_id: str, name: str, description: str) -> None:
        self._ref = ProviderRef(
            id=provider_id, name=name, description=description, available=False
        )

    @property
    def ref(self) -> ProviderRef:
        return self._ref

    def locator_options(self, key: str) -> list[str]:
        return []

    def open_session(self, locator: Locator) -> NoReturn:
        raise PreconditionError(f"{self._ref.name} is not available yet")


def azure_provider() -> PlaceholderProvider:
    return PlaceholderProvider("azure", "Azure", "Microsoft Azure")


def gcp_provider() -> PlaceholderProvider:
    return PlaceholderProvider("gcp", "GCP", "Google Cloud Platform")
