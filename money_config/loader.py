"""
Configuration Loader (``money_config.loader``).

Responsibility
--------------
Reads one YAML file and turns it into the frozen ``money_config.schema``
dataclasses. Runtime code goes through ``money_config.get_active_config()``.

Invariants enforced
-------------------
* Required keys are never defaulted; a bad section raises ``ValueError``
  naming the offending value.
* Parsed settings are immutable.
* ``compute_checksum`` hashes the raw mapping (SHA-256 over sorted-key
  JSON) so two loads of the same file carry the same checksum.

Failure modes
-------------
* File absent  -> ``FileNotFoundError`` from ``open``.
* Invalid YAML  -> ``yaml.YAMLError`` from PyYAML.
* Missing ``config_id`` / ``version``  -> ``KeyError`` propagates.
* Unknown rounding policy, negative scale, unknown log level
  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from money_config.schema import (
    AllocationSettings,
    LoggingSettings,
    MoneyConfig,
    RoundingSettings,
)
from money_kernel.domain.rounding import RoundingPolicy

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Read ``path`` with ``yaml.safe_load``; an empty file yields ``{}``.

    Raises:
        FileNotFoundError: ``path`` is missing.
        yaml.YAMLError: the document does not parse.
        ValueError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping: {path}")
    return data


def parse_rounding(data: dict[str, Any]) -> RoundingSettings:
    name = data.get("default_policy", RoundingPolicy.HALF_DOWN.value)
    return RoundingSettings(default_policy=RoundingPolicy.from_name(name))


def parse_allocation(data: dict[str, Any]) -> AllocationSettings:
    scale = data.get("scale")
    if scale is not None and (isinstance(scale, bool) or not isinstance(scale, int) or scale < 0):
        raise ValueError(f"allocation.scale must be a non-negative integer, got {scale!r}")
    return AllocationSettings(scale=scale)


def parse_logging(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log level: {data.get('level')!r}")
    return LoggingSettings(level=level)


def parse_config(data: dict[str, Any]) -> MoneyConfig:
    """
    Parse a ``MoneyConfig`` from a dict.

    Preconditions:
        - ``data`` contains ``config_id`` and ``version``.
    Postconditions:
        - Returns a frozen ``MoneyConfig`` whose checksum covers ``data``.
    Raises:
        KeyError: if required keys are missing.
        ValueError: if a section holds an invalid value.
    """
    return MoneyConfig(
        config_id=str(data["config_id"]),
        version=int(data["version"]),
        rounding=parse_rounding(data.get("rounding") or {}),
        allocation=parse_allocation(data.get("allocation") or {}),
        logging=parse_logging(data.get("logging") or {}),
        checksum=compute_checksum(data),
    )


def log_level_of(config: MoneyConfig) -> int:
    return logging.getLevelName(config.logging.level)


def compute_checksum(data: dict[str, Any]) -> str:
    """
    SHA-256 hex digest of ``data`` rendered as sorted-key JSON.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
