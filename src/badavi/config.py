"""Configuration file loading with per-field fallback to defaults."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import AliasChoices, ValidationError

from badavi.errors import ConfigFileNotFoundError
from badavi.schemas import BadaviConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "badavi-config.json"


def _accepted_keys() -> dict[str, str]:
    """Map every accepted JSON key to its model field name."""
    keys: dict[str, str] = {}
    for name, info in BadaviConfig.model_fields.items():
        keys[name] = name
        alias = info.validation_alias
        if isinstance(alias, AliasChoices):
            for choice in alias.choices:
                if isinstance(choice, str):
                    keys[choice] = name
    return keys


def _read_document(config_path: Path) -> dict[str, object]:
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning(
            "Could not read or parse %s, using default settings: %s", config_path, exc
        )
        return {}
    if not isinstance(payload, dict):
        logger.warning(
            "Configuration in %s must be a JSON object, using default settings.",
            config_path,
        )
        return {}
    return payload


def validate_config(raw: Mapping[str, object]) -> BadaviConfig:
    """Validate raw configuration, substituting defaults for malformed fields.

    Parameters
    ----------
    raw : Mapping[str, object]
        Decoded configuration document.

    Returns
    -------
    BadaviConfig
        Configuration in which every invalid field carries its default.
    """
    accepted = _accepted_keys()
    document = dict(raw)
    while True:
        try:
            return BadaviConfig.model_validate(document)
        except ValidationError as exc:
            invalid = {
                accepted.get(str(err["loc"][0]), str(err["loc"][0]))
                for err in exc.errors()
                if err["loc"]
            }
            dropped = [key for key in document if accepted.get(key) in invalid]
            if not dropped:
                logger.warning("Invalid configuration, using default settings: %s", exc)
                return BadaviConfig()
            for field in sorted(invalid):
                logger.warning(
                    "Invalid value for '%s' in configuration, using default %r.",
                    field,
                    BadaviConfig.model_fields[field].default,
                )
            for key in dropped:
                del document[key]


def load_config(input_dir: Path, config_path: Path | None = None) -> BadaviConfig:
    """Load configuration for a conversion run.

    Parameters
    ----------
    input_dir : Path
        Input folder, searched for ``badavi-config.json`` when no explicit
        path is given.
    config_path : Path | None, default=None
        Explicit configuration file.

    Returns
    -------
    BadaviConfig
        Validated configuration.

    Raises
    ------
    ConfigFileNotFoundError
        If ``config_path`` was given but does not exist.
    """
    if config_path is not None:
        resolved = config_path.resolve()
        if not resolved.is_file():
            raise ConfigFileNotFoundError(
                f"Configuration file not found at specified path: {resolved}"
            )
    else:
        resolved = (input_dir / CONFIG_FILENAME).resolve()
        if not resolved.is_file():
            logger.info(
                "No %s in %s, using default settings.", CONFIG_FILENAME, input_dir
            )
            return BadaviConfig()

    config = validate_config(_read_document(resolved))
    logger.info("Loaded configuration from %s", resolved)
    return config
