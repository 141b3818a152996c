"""Tests for formatting utilities."""

from datetime import datetime, timedelta, timezone

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_format_timestamp_just_now():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW - timedelta(seconds=5)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "Just now"


def test_format_timestamp_minutes_ago():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW - timedelta(minutes=30)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "30m ago"


def test_format_timestamp_hours_ago():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW - timedelta(hours=2)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "2h ago"


def test_format_timestamp_yesterday():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW - timedelta(days=1)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "Yesterday"


def test_format_timestamp_days_ago():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW - timedelta(days=3)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "3d ago"


def test_format_timestamp_weeks_ago():
    from clippie.ui.utils.formatting import format_timestamp

    past = NOW - timedelta(days=10)

    result = format_timestamp(past.isoformat(), now=NOW)

    assert result == past.astimezone().strftime("%b %d")


def test_format_timestamp_future_clock_skew():
    from clippie.ui.utils.formatting import format_timestamp

    timestamp = (NOW + timedelta(minutes=5)).isoformat()

    assert format_timestamp(timestamp, now=NOW) == "Just now"


def test_format_timestamp_invalid():
    from clippie.ui.utils.formatting import format_timestamp

    assert format_timestamp("invalid") == "invalid"


def test_one_line_keeps_length():
    from clippie.ui.utils.formatting import one_line

    text = "line 1\nline\t2\r"

    result = one_line(text)

    assert "\n" not in result
    assert len(result) == len(text)


def test_format_size():
    from clippie.ui.utils.formatting import format_size

    assert format_size(512) == "512.0 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(5 * 1024 * 1024) == "5.0 MB"
