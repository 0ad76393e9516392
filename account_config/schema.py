"""
Configuration schema -- typed, frozen settings for the account kernel.

Every parsed configuration is a frozen dataclass; nothing downstream ever
sees the raw YAML mapping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

LOG_LEVELS: frozenset[str] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
)


@dataclass(frozen=True)
class KernelSettings:
    """
    Runtime settings for the account kernel.

    Attributes:
        log_level: Name of the stdlib logging level for the
            ``account_kernel`` logger hierarchy.
        allowed_currencies: Currency codes accounts may use. ``None``
            accepts every ISO 4217 code.
    """

    log_level: str = "INFO"
    allowed_currencies: frozenset[str] | None = None

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
