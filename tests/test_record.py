"""Tests for the per-call log record builder."""

import pytest

from logfacade.errors import RecordConsumedError, UnknownLevelError
from logfacade.record import LogRecordBuilder, error_details, is_error_like


class _RecordingLogger:
    def __init__(self):
        self.calls = []

    def log(self, level, message, meta):
        self.calls.append((level, message, meta))


class _ErrorLike:
    def __init__(self, message, stack=None):
        self.message = message
        if stack is not None:
            self.stack = stack


@pytest.fixture
def sink():
    return _RecordingLogger()


class TestLogRecordBuilder:
    def test_emits_message_and_meta(self, sink):
        LogRecordBuilder(sink).add_meta({"name": "Dan"}).info("hi")

        assert sink.calls == [("info", "hi", {"name": "Dan"})]

    def test_later_meta_wins(self, sink):
        record = LogRecordBuilder(sink, meta={"a": 1, "b": 1})
        record.add_meta({"b": 2, "c": 2})
        record.add_meta({"c": 3})
        record.debug("x")

        assert sink.calls[0][2] == {"a": 1, "b": 2, "c": 3}

    def test_default_meta_not_mutated(self, sink):
        defaults = {"service": "api"}
        LogRecordBuilder(sink, meta=defaults).add_meta({"service": "worker"}).info("x")
        assert defaults == {"service": "api"}

    def test_add_error_from_raised_exception(self, sink):
        try:
            raise ValueError("dangit")
        except ValueError as exc:
            LogRecordBuilder(sink).add_error(exc).error("oops")

        meta = sink.calls[0][2]
        assert meta["errMsg"] == "dangit"
        assert "Traceback" in meta["errStack"]
        assert "ValueError: dangit" in meta["errStack"]

    def test_add_error_never_raised(self, sink):
        LogRecordBuilder(sink).add_error(KeyError("k")).error("oops")
        assert "KeyError" in sink.calls[0][2]["errStack"]

    def test_error_like_without_stack(self, sink):
        LogRecordBuilder(sink).add_error(_ErrorLike("remote failed")).warning("x")

        meta = sink.calls[0][2]
        assert meta["errMsg"] == "remote failed"
        assert "errStack" not in meta

    def test_err_no_stack_option(self, sink):
        record = LogRecordBuilder(sink, opts={"err_no_stack": True})
        record.add_error(RuntimeError("quiet")).crit("x")

        meta = sink.calls[0][2]
        assert meta["errMsg"] == "quiet"
        assert "errStack" not in meta

    def test_emitted_meta_is_frozen(self, sink):
        LogRecordBuilder(sink).add_meta({"a": 1}).info("x")
        with pytest.raises(TypeError):
            sink.calls[0][2]["a"] = 2

    def test_second_emission_fails(self, sink):
        record = LogRecordBuilder(sink)
        record.info("once")
        assert record.emitted
        with pytest.raises(RecordConsumedError):
            record.info("twice")
        assert len(sink.calls) == 1

    def test_mutation_after_emission_fails(self, sink):
        record = LogRecordBuilder(sink)
        record.notice("done")
        with pytest.raises(RecordConsumedError):
            record.add_meta({"late": True})
        with pytest.raises(RecordConsumedError):
            record.add_error(ValueError("late"))

    def test_unknown_level_does_not_consume(self, sink):
        record = LogRecordBuilder(sink)
        with pytest.raises(UnknownLevelError):
            record.log("trace", "x")
        record.log("debug", "x")
        assert sink.calls[0][0] == "debug"

    def test_add_meta_rejects_non_mapping(self, sink):
        with pytest.raises(TypeError):
            LogRecordBuilder(sink).add_meta(["not", "a", "mapping"])

    @pytest.mark.parametrize(
        "level", ["emerg", "alert", "crit", "error", "warning", "notice", "info", "debug"]
    )
    def test_level_methods(self, sink, level):
        getattr(LogRecordBuilder(sink), level)("msg")
        assert sink.calls[0][:2] == (level, "msg")


class TestErrorLike:
    def test_exceptions_are_error_like(self):
        assert is_error_like(ValueError("x"))

    def test_mappings_are_meta(self):
        assert not is_error_like({"message": "looks like an error"})
        assert not is_error_like(None)

    def test_objects_with_message(self):
        assert is_error_like(_ErrorLike("boom"))
        assert not is_error_like("plain string")

    def test_error_details_uses_stack_attribute(self):
        assert error_details(_ErrorLike("boom", "at line 1")) == ("boom", "at line 1")
