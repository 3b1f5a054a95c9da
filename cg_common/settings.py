"""Runtime settings: defaults, optional YAML file, then environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cg_common.config.env import parse_int_env, parse_list_env
from cg_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_AWS_REGIONS: tuple[str, ...] = (
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "eu-west-1",
    "eu-west-2",
    "eu-central-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-northeast-1",
)


class CloudgateSettings(BaseModel):
    """User-tunable knobs for the wizard."""

    regions: list[str] = Field(default_factory=lambda: list(DEFAULT_AWS_REGIONS))
    table_height: int = Field(default=10, ge=3, le=50)
    default_profile: str | None = None
    log_level: str | None = None

    @field_validator("regions")
    @classmethod
    def _regions_not_empty(cls, value: list[str]) -> list[str]:
        cleaned = [region.strip() for region in value if region and region.strip()]
        if not cleaned:
            raise ValueError("regions must contain at least one region")
        return cleaned


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {path}", context={"path": path}
        )
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in {path}", context={"path": path}, cause=exc
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping at the top level.",
            context={"path": path},
        )
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    regions = parse_list_env(environ.get("CG_REGIONS"))
    if regions is not None:
        overrides["regions"] = regions
    table_height = parse_int_env(environ.get("CG_TABLE_HEIGHT"))
    if table_height is not None:
        overrides["table_height"] = table_height
    if environ.get("CG_DEFAULT_PROFILE"):
        overrides["default_profile"] = environ["CG_DEFAULT_PROFILE"]
    if environ.get("CG_LOG_LEVEL"):
        overrides["log_level"] = environ["CG_LOG_LEVEL"]
    return overrides


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> CloudgateSettings:
    """Resolve settings with precedence: defaults < YAML file < environment."""
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    resolved_path = config_path
    if resolved_path is None and env.get("CG_CONFIG"):
        resolved_path = Path(env["CG_CONFIG"]).expanduser()
    if resolved_path is not None:
        data.update(_load_file(resolved_path))
        logger.debug("Loaded settings file %s", resolved_path)

    data.update(_env_overrides(env))
    try:
        return CloudgateSettings(**data)
    except PydanticValidationError as exc:
        raise ConfigurationError(
            "Invalid cloudgate settings", context={"errors": exc.errors()}, cause=exc
        ) from exc
