"""
Bridges -- apply KernelSettings to the account kernel.

The kernel never imports account_config. These functions translate
settings into the plain arguments the kernel already accepts.
"""

from __future__ import annotations

import logging
from functools import partial

from account_config.schema import KernelSettings
from account_kernel.domain.values import CurrencyCode
from account_kernel.logging_config import configure_logging, get_logger
from account_kernel.serialization import CurrencyParser

logger = get_logger("config.bridges")


def currency_parser(settings: KernelSettings) -> CurrencyParser:
    """A currency parser that honours ``settings.allowed_currencies``."""
    if settings.allowed_currencies is None:
        return CurrencyCode
    return partial(CurrencyCode.parse, allowed=settings.allowed_currencies)


def configure_kernel(settings: KernelSettings) -> CurrencyParser:
    """
    Configure kernel logging from ``settings``.

    The log level is applied even when logging was already configured.

    Returns:
        The currency parser to pass to ``loads_account`` and to use before
        ``new_account``.
    """
    configure_logging(level=settings.log_level_number)
    # configure_logging is a no-op once configured; the level still applies
    logging.getLogger("account_kernel").setLevel(settings.log_level_number)
    logger.info(
        "kernel_configured",
        extra={
            "log_level": settings.log_level,
            "allowed_currencies": (
                sorted(settings.allowed_currencies)
                if settings.allowed_currencies is not None
                else None
            ),
        },
    )
    return currency_parser(settings)
