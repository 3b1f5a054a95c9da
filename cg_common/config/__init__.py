"""Configuration helpers shared across cloudgate packages."""

from cg_common.config.env import parse_bool_env, parse_int_env, parse_list_env

__all__ = ["parse_bool_env", "parse_int_env", "parse_list_env"]
