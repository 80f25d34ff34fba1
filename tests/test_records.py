"""
Tests for levels and records.

Covers:
- Level / LevelFilter ordering and name resolution
- Field/sink threshold comparison
- Record construction and immutability
"""

from datetime import datetime, timezone

import pytest

from logfan.records import Level, LevelFilter, Record, level_name, passes


# ═══════════════════════════════════════════════════════════════════
#  Levels
# ═══════════════════════════════════════════════════════════════════

class TestLevel:
    def test_ordered_by_verbosity(self):
        assert Level.ERROR < Level.WARN < Level.INFO < Level.DEBUG < Level.TRACE

    def test_from_name_case_insensitive(self):
        assert Level.from_name("debug") == Level.DEBUG
        assert Level.from_name("Info") == Level.INFO
        assert Level.from_name("warning") == Level.WARN

    def test_from_name_invalid(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            Level.from_name("fatal")

    def test_level_name(self):
        assert level_name(Level.ERROR) == "ERROR"
        assert level_name(99) == "99"


class TestLevelFilter:
    def test_off_below_everything(self):
        assert LevelFilter.OFF < LevelFilter.ERROR
        assert all(LevelFilter.OFF < level for level in Level)

    def test_all_admits_trace(self):
        assert LevelFilter.ALL is LevelFilter.TRACE
        assert LevelFilter.from_name("all") == LevelFilter.TRACE

    def test_from_value(self):
        assert LevelFilter.from_value(3) == LevelFilter.INFO
        assert LevelFilter.from_value("off") == LevelFilter.OFF
        with pytest.raises(ValueError, match="No level filter"):
            LevelFilter.from_value(42)
        with pytest.raises(TypeError):
            LevelFilter.from_value(1.5)

    def test_compares_with_levels(self):
        assert Level.WARN <= LevelFilter.WARN
        assert not Level.INFO <= LevelFilter.WARN


class TestPasses:
    def test_threshold_at_or_below_record_level(self):
        assert passes(LevelFilter.DEBUG, Level.DEBUG)
        assert passes(LevelFilter.DEBUG, Level.TRACE)
        assert not passes(LevelFilter.DEBUG, Level.INFO)

    def test_error_threshold_always_shows(self):
        assert all(passes(LevelFilter.ERROR, level) for level in Level)

    def test_off_never_shows(self):
        assert not any(passes(LevelFilter.OFF, level) for level in Level)


# ═══════════════════════════════════════════════════════════════════
#  Record
# ═══════════════════════════════════════════════════════════════════

class TestRecord:
    def test_create_basic(self):
        record = Record.create(Level.INFO, "listening", target="app.net")
        assert record.level is Level.INFO
        assert record.level_name == "INFO"
        assert record.target == "app.net"
        assert record.file is None and record.line is None

    def test_create_from_name(self):
        assert Record.create("warn", "x").level is Level.WARN

    def test_int_level_coerced(self):
        assert Record(level=1, message="x").level is Level.ERROR

    def test_immutable(self):
        record = Record.create(Level.INFO, "test")
        with pytest.raises(AttributeError):
            record.message = "changed"

    def test_timestamp_is_utc(self):
        record = Record.create(Level.INFO, "test")
        assert record.timestamp.tzinfo is not None
        assert record.timestamp.utcoffset().total_seconds() == 0

    def test_explicit_timestamp(self):
        ts = datetime(2026, 2, 12, 14, 32, 5, tzinfo=timezone.utc)
        assert Record(Level.INFO, "x", timestamp=ts).timestamp == ts
