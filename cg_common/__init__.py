"""Shared helpers for cloudgate."""

from cg_common.api import CloudgateSettings, configure_logging, load_settings

__all__ = ["CloudgateSettings", "configure_logging", "load_settings"]
