"""
Configuration Loader (``account_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into a ``KernelSettings``
instance. Runtime callers go through ``account_config.get_active_settings()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys, bad log levels, bad currency codes -> ``ValueError``.

Example file::

    log_level: DEBUG
    allowed_currencies: [EUR, GBP, USD]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from account_config.schema import LOG_LEVELS, KernelSettings
from account_kernel.domain.currency import CurrencyRegistry
from account_kernel.exceptions import InvalidCurrencyError

_KNOWN_KEYS = frozenset({"log_level", "allowed_currencies"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level of the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return data


def parse_log_level(value: Any) -> str:
    """Parse a log level name, case-insensitively."""
    if not isinstance(value, str) or value.strip().upper() not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log_level {value!r}; expected one of {sorted(LOG_LEVELS)}"
        )
    return value.strip().upper()


def parse_allowed_currencies(value: Any) -> frozenset[str] | None:
    """Parse a list of ISO 4217 codes; ``None`` means unrestricted."""
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"allowed_currencies must be a list, got {type(value).__name__}")
    codes: set[str] = set()
    for code in value:
        try:
            codes.add(CurrencyRegistry.validate(code))
        except InvalidCurrencyError as e:
            raise ValueError(f"Invalid entry in allowed_currencies: {e}") from e
    return frozenset(codes)


def parse_settings(data: dict[str, Any]) -> KernelSettings:
    """Parse ``KernelSettings`` from a dict, rejecting unknown keys."""
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown settings keys: {sorted(unknown)}")

    defaults = KernelSettings()
    return KernelSettings(
        log_level=parse_log_level(data.get("log_level", defaults.log_level)),
        allowed_currencies=parse_allowed_currencies(data.get("allowed_currencies")),
    )


def load_settings(path: Path) -> KernelSettings:
    """Load and parse a settings file."""
    return parse_settings(load_yaml_file(path))
