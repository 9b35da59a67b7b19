from __future__ import annotations

"""
Configuration Validator.

Ensures the settings dictionary handed to the engine contains valid types and
normalized values. Uses a declarative schema to keep the per-field logic small.
"""

import logging
from typing import Any, Dict, List, Tuple

from foldervault.domain import constants as const
from foldervault.domain.config import get_default_config
from foldervault.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)


def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the configuration dictionary.

    Converts loosely typed values (e.g. "true", "6") where unambiguous and
    fills missing keys from the defaults.

    Args:
        config: The raw configuration dictionary (or untrusted input).
        strict: If True, raise TypeError/ValueError on invalid data.

    Returns:
        Tuple[Dict, List[str]]: (Normalized Config, List of Warnings).
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # Declarative Schema Definition
    bool_fields = ["preserve_structure", "metrics_include_hidden"]
    choice_fields = {
        "compression": tuple(const.COMPRESSION_METHODS),
        "log_level": tuple(_LEVEL_MAP),
    }

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, choices in choice_fields.items():
        merged[field] = _as_choice(merged.get(field), defaults[field], choices, field, warnings, strict)

    merged["compression_level"] = _as_level(
        merged.get("compression_level"), defaults["compression_level"], warnings, strict
    )

    log_file = merged.get("log_file")
    if log_file is None:
        merged["log_file"] = ""
    elif not isinstance(log_file, str):
        msg = f"Invalid field 'log_file': expected str, received {type(log_file).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        merged["log_file"] = defaults["log_file"]
    else:
        merged["log_file"] = log_file.strip()

    return merged, warnings


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce value to boolean."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Ensure value is one of the allowed (case-insensitive) choices."""
    if value is None:
        return fallback
    if isinstance(value, str):
        for choice in choices:
            if value.strip().lower() == choice.lower():
                return choice

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_level(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Ensure the compression level is an integer within zlib's range."""
    if value is None:
        return fallback

    level = value
    if isinstance(value, str) and not strict:
        try:
            level = int(value.strip())
            warnings.append(f"Field 'compression_level' converted from '{value}' to {level}.")
        except ValueError:
            level = value

    if isinstance(level, bool) or not isinstance(level, int):
        msg = f"Invalid field 'compression_level': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if not const.MIN_COMPRESSION_LEVEL <= level <= const.MAX_COMPRESSION_LEVEL:
        msg = (
            f"Field 'compression_level' out of range: {level} "
            f"(expected {const.MIN_COMPRESSION_LEVEL}-{const.MAX_COMPRESSION_LEVEL})."
        )
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return level
