"""
MoneyConfig schema.

The typed, frozen form of a YAML configuration file. The loader parses YAML
into these types; bridges translate them into kernel and engine objects.
"""

from __future__ import annotations

from dataclasses import dataclass

from money_kernel.domain.rounding import RoundingPolicy


@dataclass(frozen=True)
class RoundingSettings:
    """Rounding applied where callers do not name a policy."""

    default_policy: RoundingPolicy = RoundingPolicy.HALF_DOWN


@dataclass(frozen=True)
class AllocationSettings:
    """Allocation engine defaults. ``scale`` None means "use the total's scale"."""

    scale: int | None = None


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class MoneyConfig:
    """A validated configuration set."""

    config_id: str
    version: int
    rounding: RoundingSettings
    allocation: AllocationSettings
    logging: LoggingSettings
    checksum: str = ""
