"""
account_config -- single public entrypoint for kernel configuration.

Runtime code obtains settings only through ``get_active_settings()`` and
applies them only through ``account_config.bridges``. The kernel MUST
NEVER import from ``account_config``.
"""

from __future__ import annotations

from pathlib import Path

from account_config.loader import load_settings
from account_config.schema import KernelSettings
from account_kernel.logging_config import get_logger

__all__ = ["KernelSettings", "get_active_settings"]

_logger = get_logger("config")


def get_active_settings(path: Path | str | None = None) -> KernelSettings:
    """
    Return the settings to run the kernel with.

    Args:
        path: YAML settings file. Without one, defaults are returned.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: The file does not parse into valid settings.
    """
    if path is None:
        return KernelSettings()
    settings = load_settings(Path(path))
    _logger.info(
        "settings_loaded",
        extra={"path": str(path), "log_level": settings.log_level},
    )
    return settings
