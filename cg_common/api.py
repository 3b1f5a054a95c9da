"""Public API surface for cg_common."""

from cg_common.config.env import parse_bool_env, parse_int_env, parse_list_env
from cg_common.errors import (
    CGError,
    ConfigurationError,
    PreconditionError,
    RemoteError,
    UIFlowError,
    ValidationError,
    error_to_payload,
)
from cg_common.logging import configure_logging
from cg_common.settings import DEFAULT_AWS_REGIONS, CloudgateSettings, load_settings

__all__ = [
    "CGError",
    "CloudgateSettings",
    "ConfigurationError",
    "DEFAULT_AWS_REGIONS",
    "PreconditionError",
    "RemoteError",
    "UIFlowError",
    "ValidationError",
    "configure_logging",
    "error_to_payload",
    "load_settings",
    "parse_bool_env",
    "parse_int_env",
    "parse_list_env",
]
