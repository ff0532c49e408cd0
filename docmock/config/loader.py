"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any


def get_config_dir() -> Path | None:
    """Get the configuration directory path, if one exists.

    The config directory can be overridden with DOCMOCK_CONFIG_DIR env var.
    Otherwise 'config/' is searched for in the current directory and its
    parents. A test double must work without any configuration, so a
    missing directory is not an error unless it was named explicitly.
    """
    config_dir_env = os.environ.get("DOCMOCK_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):
        config_path = current / "config"
        if (config_path / "default.toml").exists():
            return config_path
        current = current.parent

    return None


def get_environment() -> str:
    """Get the current environment from DOCMOCK_ENV.

    Defaults to 'test' since the store is a test double.
    """
    return os.environ.get("DOCMOCK_ENV", "test")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config() -> dict[str, Any]:
    """Load configuration from TOML files.

    Loading order:
    1. config/default.toml (optional)
    2. config/{DOCMOCK_ENV}.toml (optional)

    Returns:
        Merged configuration dictionary, empty when no files exist
    """
    config_dir = get_config_dir()
    if config_dir is None:
        return {}

    config: dict[str, Any] = {}
    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = load_toml(default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))

    return config
