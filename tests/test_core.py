"""
Tests for the registration slot and module-level logging API.

Covers:
- One-shot installation (second set_logger raises)
- No-op logging with nothing installed
- Max-level gate
- Caller metadata: target, module path, file, line
- %-style arguments
- Failures inside the installed logger never reach the caller
"""

import pytest

from logfan import core
from logfan.adapters import SharedLogger, TestLogger
from logfan.config import ConfigBuilder
from logfan.core import Dispatcher
from logfan.errors import AlreadyInitializedError
from logfan.records import Level, LevelFilter


@pytest.fixture(autouse=True)
def reset_dispatcher():
    Dispatcher.reset()
    yield
    Dispatcher.reset()


@pytest.fixture
def capture():
    logger = TestLogger(LevelFilter.TRACE)
    core.set_logger(logger)
    return logger


class RaisingLogger(SharedLogger):
    def emit(self, record):
        raise RuntimeError("emit failed")

    def flush(self):
        raise RuntimeError("flush failed")


# ═══════════════════════════════════════════════════════════════════
#  Installation
# ═══════════════════════════════════════════════════════════════════

class TestInstallation:
    def test_nothing_installed(self):
        assert core.get_logger() is None
        core.info("goes nowhere")
        core.flush()

    def test_set_logger(self):
        logger = TestLogger(LevelFilter.WARN)
        core.set_logger(logger)
        assert core.get_logger() is logger
        assert core.max_level() == LevelFilter.WARN

    def test_second_set_logger_rejected(self):
        first = TestLogger(LevelFilter.INFO)
        core.set_logger(first)
        with pytest.raises(AlreadyInitializedError):
            core.set_logger(TestLogger(LevelFilter.INFO))
        assert core.get_logger() is first

    def test_singleton(self):
        assert Dispatcher.instance() is Dispatcher.instance()

    def test_reset_closes_logger(self, tmp_path):
        from logfan.adapters import FileLogger
        from logfan.config import Config

        logger = FileLogger(LevelFilter.INFO, Config(), tmp_path / "app.log")
        core.set_logger(logger)
        Dispatcher.reset()
        assert logger.closed
        assert core.get_logger() is None

    def test_reset_clears_slot_when_close_fails(self):
        class FailingClose(TestLogger):
            def close(self):
                raise RuntimeError("close failed")

        core.set_logger(FailingClose(LevelFilter.INFO))
        with pytest.raises(RuntimeError):
            Dispatcher.reset()
        assert core.get_logger() is None
        core.set_logger(TestLogger(LevelFilter.INFO))

    def test_separate_instances_independent(self, capture):
        local = Dispatcher()
        other = TestLogger(LevelFilter.INFO)
        local.set_logger(other)
        local.log(Level.INFO, "local only")
        assert other.count == 1
        assert capture.count == 0


# ═══════════════════════════════════════════════════════════════════
#  Logging API
# ═══════════════════════════════════════════════════════════════════

class TestLoggingApi:
    def test_level_functions(self, capture):
        core.error("e")
        core.warn("w")
        core.info("i")
        core.debug("d")
        core.trace("t")
        assert [r.level for r in capture.records] == list(Level)

    def test_log_by_name(self, capture):
        core.log("warning", "named")
        assert capture.records[0].level == Level.WARN

    def test_percent_args(self, capture):
        core.info("listening on %s:%d", "localhost", 8080)
        assert capture.records[0].message == "listening on localhost:8080"

    def test_bad_args_kept(self, capture):
        core.info("no placeholders", 42)
        assert capture.records[0].message.startswith("no placeholders")
        assert "42" in capture.records[0].message

    def test_caller_metadata(self, capture):
        core.info("where am I")
        record = capture.records[0]
        assert record.target == __name__
        assert record.module_path == __name__
        assert record.file.endswith("test_core.py")
        assert isinstance(record.line, int) and record.line > 0

    def test_explicit_target(self, capture):
        core.info("routed", target="app.db")
        assert capture.records[0].target == "app.db"

    def test_max_level_gate(self, capture):
        core.set_max_level(LevelFilter.WARN)
        core.info("dropped")
        core.warn("kept")
        assert [r.message for r in capture.records] == ["kept"]

    def test_max_level_off(self, capture):
        core.set_max_level("off")
        core.error("dropped")
        assert capture.count == 0

    def test_message_markup(self):
        logger = TestLogger(LevelFilter.TRACE, ConfigBuilder().set_markup(True).build())
        core.set_logger(logger)
        core.info("<red>failed</> after <bold>%d</> retries", 3)
        assert "<red>" not in logger.output
        assert logger.output.endswith("[INFO] failed after 3 retries\n")

    def test_logger_level_still_applies(self):
        logger = TestLogger(LevelFilter.WARN)
        core.set_logger(logger)
        core.set_max_level(LevelFilter.TRACE)
        core.debug("below adapter level")
        assert logger.count == 0


# ═══════════════════════════════════════════════════════════════════
#  Failure isolation
# ═══════════════════════════════════════════════════════════════════

class TestFailureIsolation:
    def test_emit_failure_swallowed(self):
        core.set_logger(RaisingLogger(LevelFilter.INFO))
        core.error("still fine")

    def test_flush_failure_swallowed(self):
        core.set_logger(RaisingLogger(LevelFilter.INFO))
        core.flush()
