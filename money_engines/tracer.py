"""
money_engines.tracer -- Engine invocation tracer emitting MONEY_ENGINE_TRACE.

Responsibility:
    ``@traced_engine`` wraps a pure engine call and, when it returns,
    emits one structured log record naming the engine, its version, a
    fingerprint of the selected arguments and the wall time spent.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only; engines stay free of I/O.

Invariants enforced:
    - Replay safety: the fingerprint depends only on argument values. Kernel
      value objects contribute their canonical text, so ``1.5`` and ``1.50``
      fingerprint differently; dict keys are sorted; the digest is the
      first 16 hex chars of SHA-256.
    - Positional and keyword spellings of the same call fingerprint alike,
      because arguments are bound against the engine's signature.

Failure modes:
    - A fingerprint field the call leaves unbound is recorded as "null".
    - A one-shot iterator passed for a fingerprint field is read into a
      tuple first, and the engine receives that tuple.
    - Engine exceptions propagate unchanged and no trace record is written.

Usage:
    from money_engines.tracer import traced_engine

    @traced_engine("allocation", "1.0", fingerprint_fields=("total", "ratios"))
    def allocate(self, total, ratios):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from money_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

TRACE_TYPE = "MONEY_ENGINE_TRACE"


def _canonicalize(value: Any) -> str:
    """Stable text for a fingerprinted value."""
    match value:
        case None:
            return "null"
        case Enum():
            return str(value.value)
        case str():
            return value
        case Mapping():
            entries = sorted((str(k), _canonicalize(v)) for k, v in value.items())
            return "{" + ",".join(f"{k}:{v}" for k, v in entries) + "}"
        case Iterable():
            return "[" + ",".join(_canonicalize(v) for v in value) + "]"
        case _:
            # int and the kernel value objects have an exact __str__.
            return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """16-hex-char SHA-256 prefix over ``field=value`` pairs, in field order."""
    canonical = "|".join(
        f"{field}={_canonicalize(arguments.get(field))}" for field in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def _emit_trace(
    engine_name: str,
    engine_version: str,
    fingerprint: str,
    started: float,
    func: Callable,
) -> None:
    _logger.info(
        TRACE_TYPE,
        extra={
            "trace_type": TRACE_TYPE,
            "engine_name": engine_name,
            "engine_version": engine_version,
            "input_fingerprint": fingerprint,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            "function": func.__qualname__,
        },
    )


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator that emits MONEY_ENGINE_TRACE for pure engine invocations.

    Args:
        engine_name: Engine identifier (e.g., "allocation").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Parameter names to fingerprint, however the
            caller passes them.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        def fingerprinted_call(args: tuple, kwargs: dict) -> tuple[tuple, dict, str]:
            if not fingerprint_fields:
                return args, kwargs, ""
            try:
                bound = signature.bind_partial(*args, **kwargs)
            except TypeError:
                # The call itself will raise the argument error.
                return args, kwargs, compute_input_fingerprint(fingerprint_fields, kwargs)
            one_shot = [f for f in fingerprint_fields if isinstance(bound.arguments.get(f), Iterator)]
            for field in one_shot:
                bound.arguments[field] = tuple(bound.arguments[field])
            fp = compute_input_fingerprint(fingerprint_fields, bound.arguments)
            if one_shot:
                return bound.args, bound.kwargs, fp
            return args, kwargs, fp

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            args, kwargs, fp = fingerprinted_call(args, kwargs)
            started = time.perf_counter()
            result = func(*args, **kwargs)
            _emit_trace(engine_name, engine_version, fp, started, func)
            return result

        return wrapper

    return decorator
