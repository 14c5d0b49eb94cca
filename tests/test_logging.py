"""Tests for the structured logging system (money_kernel/logging_config.py)."""

import json
import logging
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.money import Money
from money_kernel.exceptions import CurrencyMismatchError
from money_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    """Each test starts from an unconfigured money_kernel logger."""
    reset_logging()
    yield
    reset_logging()
    configure_logging(level=logging.DEBUG)


class _JsonLines:
    """StringIO-backed handler whose output is read back as parsed records."""

    def __init__(self):
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(StructuredFormatter())

    @property
    def records(self) -> list[dict]:
        return [json.loads(line) for line in self.stream.getvalue().splitlines() if line]

    @property
    def first(self) -> dict:
        return self.records[0]


@pytest.fixture
def json_lines():
    """configure_logging() wired to an in-memory JSON sink at INFO."""
    sink = _JsonLines()
    configure_logging(handler=sink.handler)
    return sink


@pytest.fixture
def log():
    return get_logger("test")


# ---------------------------------------------------------------------------
# Record shape
# ---------------------------------------------------------------------------


class TestStructuredFormatter:

    def test_core_keys(self, json_lines, log):
        log.info("hello")

        record = json_lines.first
        assert record["message"] == "hello"
        assert record["level"] == "INFO"
        assert record["logger"] == "money_kernel.test"
        assert record["ts"].endswith("+00:00")

    def test_extra_keys_are_merged(self, json_lines, log):
        log.info("allocated", extra={"part_count": 3, "status": "ok"})

        assert json_lines.first["part_count"] == 3
        assert json_lines.first["status"] == "ok"

    def test_context_keys_are_merged(self, json_lines, log):
        LogContext.set(correlation_id="abc-123", operation="month_end_split")
        log.info("split")

        assert json_lines.first["correlation_id"] == "abc-123"
        assert json_lines.first["operation"] == "month_end_split"

    def test_unset_context_is_omitted(self, json_lines, log):
        log.info("bare")

        assert not set(LogContext.FIELDS) & set(json_lines.first)

    def test_plain_exception(self, json_lines, log):
        try:
            raise ValueError("boom")
        except ValueError:
            log.error("failed", exc_info=True)

        record = json_lines.first
        assert (record["exc_type"], record["exc_message"]) == ("ValueError", "boom")
        assert "exc_code" not in record
        assert "Traceback" in record["traceback"]

    def test_kernel_exception_attributes(self, json_lines, log):
        try:
            raise CurrencyMismatchError("USD", "EUR", "add")
        except CurrencyMismatchError:
            log.error("mismatch", exc_info=True)

        record = json_lines.first
        assert record["exc_type"] == "CurrencyMismatchError"
        assert record["exc_code"] == "CURRENCY_MISMATCH"
        assert record["exc_expected"] == "USD"
        assert record["exc_received"] == "EUR"
        assert record["exc_operation"] == "add"

    def test_uuid_rendered_as_text(self, json_lines, log):
        request_id = uuid4()
        log.info("with_uuid", extra={"request_id": request_id})

        assert json_lines.first["request_id"] == str(request_id)

    def test_amounts_keep_their_digits(self, json_lines, log):
        log.info("amounts", extra={
            "amount": BigDecimal.parse("0.10"),
            "money": Money.of("3.30", "EUR"),
            "legacy": Decimal("1.50"),
        })

        record = json_lines.first
        assert record["amount"] == "0.10"
        assert record["money"] == "3.30 EUR"
        assert record["legacy"] == "1.50"

    def test_below_level_records_are_dropped(self, json_lines, log):
        log.info("first")
        log.debug("dropped")
        log.warning("second", extra={"k": "v"})

        assert [r["message"] for r in json_lines.records] == ["first", "second"]
        assert [r["level"] for r in json_lines.records] == ["INFO", "WARNING"]


# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------


class TestLogContext:

    def test_set_then_read(self):
        LogContext.set(correlation_id="x", actor_id="y")
        assert LogContext.get_all() == {"correlation_id": "x", "actor_id": "y"}

    def test_set_is_cumulative(self):
        LogContext.set(correlation_id="a")
        LogContext.set(trace_id="b", operation=None)
        assert LogContext.get_all() == {"correlation_id": "a", "trace_id": "b"}

    def test_every_field_settable(self):
        LogContext.set(**{name: name.upper() for name in LogContext.FIELDS})
        assert list(LogContext.get_all()) == list(LogContext.FIELDS)

    def test_clear_empties_context(self):
        LogContext.set(correlation_id="x", trace_id="t")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_set_rejects_unknown_field(self):
        with pytest.raises(TypeError):
            LogContext.set(tenant="acme")

    def test_bind_shadows_then_restores(self):
        LogContext.set(correlation_id="outer")
        with LogContext.bind(correlation_id="inner", operation="split"):
            assert LogContext.get_all() == {"correlation_id": "inner", "operation": "split"}
        assert LogContext.get_all() == {"correlation_id": "outer"}

    def test_bind_without_prior_value(self):
        with LogContext.bind(trace_id="temp"):
            assert LogContext.get_all()["trace_id"] == "temp"
        assert "trace_id" not in LogContext.get_all()

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(actor_id="batch"):
                raise RuntimeError("inside")
        assert LogContext.get_all() == {}

    def test_bind_rejects_unknown_field_before_entering(self):
        with pytest.raises(TypeError):
            LogContext.bind(event_id="nope")


# ---------------------------------------------------------------------------
# Setup and teardown
# ---------------------------------------------------------------------------


class TestConfigureLogging:

    def test_second_call_is_ignored(self):
        first, second = _JsonLines(), _JsonLines()
        configure_logging(handler=first.handler)
        configure_logging(handler=second.handler)

        assert logging.getLogger("money_kernel").handlers == [first.handler]

    def test_records_do_not_reach_root_logger(self, json_lines):
        assert logging.getLogger("money_kernel").propagate is False

    def test_child_names(self):
        assert get_logger("engines.allocation").name == "money_kernel.engines.allocation"

    def test_children_share_the_handler(self):
        sink = _JsonLines()
        configure_logging(handler=sink.handler, level=logging.DEBUG)
        get_logger("deep.nested.module").debug("nested")

        assert sink.first["logger"] == "money_kernel.deep.nested.module"
        assert sink.first["level"] == "DEBUG"

    def test_reset_detaches_everything(self, json_lines):
        reset_logging()

        root = logging.getLogger("money_kernel")
        assert root.handlers == []
        assert root.level == logging.WARNING
        assert root.propagate is True

    def test_reconfigure_after_reset(self, json_lines, log):
        reset_logging()
        sink = _JsonLines()
        configure_logging(handler=sink.handler)
        log.info("again")

        assert json_lines.records == []
        assert sink.first["message"] == "again"
