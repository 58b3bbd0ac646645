"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from release_pipeline.utils.timestamps import format_timestamp, utc_now


class TestUtcNow:
    def test_returns_aware_utc(self):
        now = utc_now()
        assert now.tzinfo == timezone.utc

    def test_is_recent(self):
        before = datetime.now(timezone.utc)
        now = utc_now()
        after = datetime.now(timezone.utc)
        assert before <= now <= after


class TestFormatTimestamp:
    def test_utc(self):
        dt = datetime(2025, 11, 4, 12, 0, 5, 123456, tzinfo=timezone.utc)
        assert format_timestamp(dt) == "2025-11-04T12:00:05Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05Z"

    def test_other_offset_converted(self):
        dt = datetime(2025, 1, 2, 8, 0, tzinfo=timezone(timedelta(hours=5)))
        assert format_timestamp(dt) == "2025-01-02T03:00:00Z"
