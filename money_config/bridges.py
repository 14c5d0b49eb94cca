"""
Config -> Kernel Bridges.

Functions that convert a MoneyConfig into kernel and engine objects. They
live in money_config (the producer) because the kernel and engines must
NEVER import money_config.

Usage:
    from money_config import get_active_config
    from money_config.bridges import build_allocation_engine, build_money_context

    config = get_active_config()
    context = build_money_context(config)
    price = Money.of("19.999", "USD", context=context)
"""

from __future__ import annotations

import logging

from money_config.loader import log_level_of
from money_config.schema import MoneyConfig
from money_engines.allocation import AllocationEngine
from money_kernel.domain.money import MoneyContext
from money_kernel.logging_config import configure_logging


def build_money_context(config: MoneyConfig) -> MoneyContext:
    """MoneyContext carrying the configured default rounding policy."""
    return MoneyContext(default_rounding=config.rounding.default_policy)


def build_allocation_engine(config: MoneyConfig) -> AllocationEngine:
    """AllocationEngine with the configured default working scale."""
    return AllocationEngine(default_scale=config.allocation.scale)


def configure_logging_from(config: MoneyConfig, **kwargs) -> None:
    """
    Apply the configured level to the money_kernel logger hierarchy.

    The level always takes effect. ``stream`` / ``handler`` in ``kwargs``
    only matter on the first configuration; later calls keep the existing
    handler.
    """
    level = log_level_of(config)
    configure_logging(level=level, **kwargs)
    logging.getLogger("money_kernel").setLevel(level)
