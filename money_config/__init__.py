"""
money_config -- single public entrypoint for money configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``. Returns a frozen ``MoneyConfig``; bridges in
    ``money_config.bridges`` turn it into kernel and engine objects.

Architecture position:
    Configuration -- YAML-driven, sits above ``money_kernel`` and
    ``money_engines``. The kernel and engines MUST NEVER import from
    ``money_config``.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``KeyError`` / ``ValueError`` -- the file fails validation.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``MONEY_CONFIG_TRACE`` log entry carrying config_id, version, checksum
    and the effective default rounding policy.
"""

from __future__ import annotations

from pathlib import Path

from money_config.loader import load_yaml_file, parse_config
from money_config.schema import MoneyConfig
from money_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default configuration file
DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> MoneyConfig:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned ``MoneyConfig`` has passed validation.
        - A ``MONEY_CONFIG_TRACE`` log entry is emitted on every
          successful call.

    Non-goals:
        - Does NOT cache; callers hold the returned config.

    Args:
        path: Override path to a YAML file. Defaults to
            money_config/sets/default.yaml.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If required keys are missing.
        ValueError: If a value fails validation.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = parse_config(load_yaml_file(config_path))

    _logger.info(
        "MONEY_CONFIG_TRACE",
        extra={
            "trace_type": "MONEY_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "default_rounding": config.rounding.default_policy.value,
            "allocation_scale": config.allocation.scale,
            "source": str(config_path),
        },
    )
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "MoneyConfig", "get_active_config"]
