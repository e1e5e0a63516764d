"""Receiver settings loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from itnrelay.models.config import ENV_VARS, SECRET_FIELDS, Settings
from itnrelay.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = get_logger("utils.config_loader")

CONFIG_FILE_ENV_VAR = "ITNRELAY_CONFIG_FILE"


class ConfigLoaderError(Exception):
    """Error raised when settings cannot be loaded."""

    pass


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_file: Path | None = None,
) -> Settings:
    """Load receiver settings.

    Non-secret values are read first from an optional YAML file (given
    explicitly or through ``ITNRELAY_CONFIG_FILE``), then overridden by
    environment variables. The passphrase is only ever read from the
    environment.

    Args:
        environ: Environment mapping, defaults to ``os.environ``.
        config_file: Path to a YAML settings file.

    Returns:
        Settings instance.

    Raises:
        ConfigLoaderError: If the YAML file is unreadable or the values are invalid.
    """
    if environ is None:
        environ = os.environ

    if config_file is None and environ.get(CONFIG_FILE_ENV_VAR):
        config_file = Path(environ[CONFIG_FILE_ENV_VAR])

    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(_load_file_values(config_file))

    for name, env_var in ENV_VARS.items():
        env_value = environ.get(env_var)
        if env_value:
            values[name] = env_value

    try:
        settings = Settings.from_mapping(values)
    except ValueError as e:
        raise ConfigLoaderError(f"Invalid settings: {e}") from e

    logger.info(
        "Loaded settings",
        extra={
            "passphrase_configured": settings.has_passphrase,
            "relay_configured": bool(settings.relay_endpoint),
            "sandbox": settings.sandbox,
            "validate_url": settings.provider_validate_url,
        },
    )
    return settings


def _load_file_values(filepath: Path) -> dict[str, Any]:
    """Read non-secret settings from a YAML file.

    Args:
        filepath: Path to the YAML file.

    Returns:
        Settings values keyed by field name. Unknown keys and secrets are dropped.

    Raises:
        ConfigLoaderError: If the file cannot be read or parsed.
    """
    try:
        content = filepath.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoaderError(f"Failed to read config file {filepath}: {e}") from e

    if not content.strip():
        logger.debug("Config file is empty", extra={"file": str(filepath)})
        return {}

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoaderError(f"Failed to parse config file {filepath}: {e}") from e

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigLoaderError(f"Config file {filepath} must contain a mapping")

    values: dict[str, Any] = {}
    for key, value in raw_config.items():
        if key in SECRET_FIELDS:
            logger.warning(
                "Ignoring secret in config file, set it in the environment instead",
                extra={"file": str(filepath), "key": key},
            )
        elif key in ENV_VARS:
            values[key] = value
        else:
            logger.debug("Ignoring unknown config key", extra={"key": key})

    return values
