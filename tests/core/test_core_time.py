"""
Tests for core.time — Clock protocol and offer windows.
"""

import pytest
from datetime import datetime, timezone, timedelta

from core.time.clock import (
    FixedClock,
    SystemClock,
    set_default_clock,
    get_default_clock,
    as_utc,
    now_utc,
    override_clock,
    resolve_now,
)
from core.time.temporal import OfferWindow, parse_timestamp


# ── Clock Tests ──────────────────────────────────────────────

class TestSystemClock:
    def test_returns_utc_datetime(self):
        dt = SystemClock().now_utc()
        assert dt.tzinfo == timezone.utc


class TestFixedClock:
    def test_returns_fixed_time(self):
        fixed = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        assert clock.now_utc() == fixed
        assert clock.now_utc() == fixed  # Same every time

    def test_naive_datetime_is_read_as_utc(self):
        clock = FixedClock(datetime(2026, 1, 1, 8, 0))
        assert clock.now_utc() == datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)

    def test_advance(self):
        fixed = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
        clock = FixedClock(fixed)
        clock.advance(3600)
        assert clock.now_utc() == fixed + timedelta(hours=1)


class TestDefaultClock:
    def test_set_and_get_default(self):
        original = get_default_clock()
        fixed = FixedClock(datetime(2026, 1, 1, tzinfo=timezone.utc))
        set_default_clock(fixed)
        try:
            assert now_utc() == datetime(2026, 1, 1, tzinfo=timezone.utc)
        finally:
            set_default_clock(original)

    def test_override_clock_restores_previous(self):
        original = get_default_clock()
        fixed = FixedClock(datetime(2026, 5, 1, tzinfo=timezone.utc))
        with override_clock(fixed) as clock:
            assert clock is fixed
            assert now_utc().month == 5
        assert get_default_clock() is original


# ── UTC Normalisation ────────────────────────────────────────

class TestAsUtc:
    def test_naive_gets_utc(self):
        assert as_utc(datetime(2026, 3, 1, 10, 0)) == datetime(
            2026, 3, 1, 10, 0, tzinfo=timezone.utc
        )

    def test_offset_is_converted(self):
        cairo = timezone(timedelta(hours=2))
        converted = as_utc(datetime(2026, 3, 1, 12, 0, tzinfo=cairo))
        assert converted == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert converted.tzinfo == timezone.utc


class TestResolveNow:
    def test_explicit_naive_now(self):
        assert resolve_now(datetime(2026, 1, 1)).tzinfo == timezone.utc

    def test_falls_back_to_default_clock(self):
        fixed = datetime(2026, 7, 1, tzinfo=timezone.utc)
        with override_clock(FixedClock(fixed)):
            assert resolve_now() == fixed


# ── OfferWindow Tests ────────────────────────────────────────

class TestOfferWindow:
    START = datetime(2026, 3, 1, tzinfo=timezone.utc)
    END = datetime(2026, 3, 31, tzinfo=timezone.utc)

    def test_closed_window_is_inclusive(self):
        window = OfferWindow(start=self.START, end=self.END)
        assert window.contains(self.START)
        assert window.contains(self.END)
        assert window.contains(datetime(2026, 3, 15, tzinfo=timezone.utc))
        assert not window.contains(self.START - timedelta(seconds=1))
        assert not window.contains(self.END + timedelta(seconds=1))

    def test_open_ended_window_contains_everything(self):
        window = OfferWindow()
        assert window.is_open_ended
        assert window.contains(datetime(1999, 1, 1, tzinfo=timezone.utc))
        assert window.contains(datetime(2099, 1, 1, tzinfo=timezone.utc))

    def test_start_only(self):
        window = OfferWindow(start=self.START)
        assert not window.has_started(self.START - timedelta(days=1))
        assert window.contains(datetime(2099, 1, 1, tzinfo=timezone.utc))

    def test_end_only(self):
        window = OfferWindow(end=self.END)
        assert window.contains(datetime(2000, 1, 1, tzinfo=timezone.utc))
        assert window.has_ended(self.END + timedelta(microseconds=1))

    def test_naive_bounds_are_stored_as_utc(self):
        window = OfferWindow(start=datetime(2026, 3, 1), end=datetime(2026, 3, 31))
        assert window.start == self.START
        assert window.end.tzinfo == timezone.utc

    def test_mixed_naive_and_aware_comparisons(self):
        naive_window = OfferWindow(start=datetime(2026, 3, 1))
        assert naive_window.contains(datetime(2026, 3, 2, tzinfo=timezone.utc))
        aware_window = OfferWindow(start=self.START, end=self.END)
        assert aware_window.contains(datetime(2026, 3, 15))
        assert not aware_window.contains(datetime(2026, 4, 1))

    def test_rejects_start_after_end(self):
        with pytest.raises(ValueError, match="start"):
            OfferWindow(start=self.END, end=self.START)


# ── Timestamp Parsing ────────────────────────────────────────

class TestParseTimestamp:
    def test_none_and_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("   ") is None

    def test_zulu_suffix(self):
        parsed = parse_timestamp("2026-03-01T10:00:00Z")
        assert parsed == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset_is_normalised_to_utc(self):
        parsed = parse_timestamp("2026-03-01T12:00:00+02:00")
        assert parsed == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_naive_is_taken_as_utc(self):
        parsed = parse_timestamp(datetime(2026, 3, 1, 10, 0))
        assert parsed.tzinfo == timezone.utc

    def test_garbage_raises(self):
        with pytest.raises(ValueError, match="Invalid timestamp"):
            parse_timestamp("next tuesday")
