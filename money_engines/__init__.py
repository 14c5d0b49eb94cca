"""
Module: money_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import money_kernel. MUST NOT import money_config.

Invariants enforced:
    - Determinism: identical inputs always produce identical outputs.
    - Exact arithmetic only: amounts are BigDecimal / Money, never float.

Audit relevance:
    Every engine invocation is traced via ``@traced_engine`` (see
    ``money_engines.tracer``), emitting MONEY_ENGINE_TRACE log records with
    engine name, version, input fingerprint and duration.
"""

from money_engines.allocation import AllocationEngine
from money_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "AllocationEngine",
    "compute_input_fingerprint",
    "traced_engine",
]
