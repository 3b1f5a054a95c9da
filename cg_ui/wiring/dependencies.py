from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cg_common.api import CloudgateSettings, configure_logging, load_settings
from cg_core.session import WizardSession
from cg_core.tasks import InlineTaskRunner, TaskRunner, ThreadedTaskRunner
from cg_providers.registry import ProviderRegistry, create_registry


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    config_path: Optional[Path] = None
    headless: bool = False

    # Lazily initialized services
    _settings: Optional[CloudgateSettings] = None
    _registry: Optional[ProviderRegistry] = None

    @property
    def settings(self) -> CloudgateSettings:
        if self._settings is None:
            self._settings = load_settings(self.config_path)
        return self._settings

    @settings.setter
    def settings(self, value: CloudgateSettings) -> None:
        self._settings = value

    @property
    def registry(self) -> ProviderRegistry:
        if self._registry is None:
            self._registry = create_registry(self.settings)
        return self._registry

    @registry.setter
    def registry(self, value: ProviderRegistry) -> None:
        self._registry = value

    def create_runner(self) -> TaskRunner:
        if self.headless:
            return InlineTaskRunner()
        return ThreadedTaskRunner()

    def create_session(self, runner: TaskRunner | None = None) -> WizardSession:
        return WizardSession(self.registry, runner or self.create_runner())


__all__ = [
    "UIContext",
    "configure_logging",
]
