"""Tests for Elapsed construction, mutation and rendering."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from elapsed import NOW_PHRASE, Component, Elapsed, TimeUnit

REF = datetime(2025, 1, 6, 12, 0, 0, tzinfo=timezone.utc)
BERLIN = ZoneInfo("Europe/Berlin")


def fixed_clock() -> datetime:
    return REF


def test_zero_difference_has_passed_and_renders_now():
    """Test that coinciding instants count as passed and render 'now'."""
    elapsed = Elapsed(REF, REF)

    assert elapsed.difference == timedelta(0)
    assert elapsed.has_passed is True
    assert elapsed.components() == {}
    assert elapsed.display() == NOW_PHRASE == "now"


def test_twenty_minutes_ahead():
    """Test a future target within the minutes band."""
    elapsed = Elapsed(REF + timedelta(minutes=20), REF)

    assert elapsed.components() == {TimeUnit.MINUTE: Component("20min", 20)}
    assert elapsed.has_passed is False
    assert elapsed.display() == "in 20min"
    assert str(elapsed) == "in 20min"


def test_three_seconds_ago_keeps_zero_minutes():
    """Test that the seconds band renders its zero-minute fragment."""
    elapsed = Elapsed(REF - timedelta(seconds=3), REF)

    assert elapsed.components() == {
        TimeUnit.MINUTE: Component("0min", 0),
        TimeUnit.SECOND: Component("3s", 3),
    }
    assert elapsed.has_passed is True
    assert elapsed.display() == "0min 3s ago"


def test_difference_is_signed():
    """Test that difference is target minus reference."""
    ahead = Elapsed(REF + timedelta(hours=5), REF)
    behind = Elapsed(REF - timedelta(hours=5), REF)

    assert ahead.difference == timedelta(hours=5)
    assert behind.difference == timedelta(hours=-5)
    assert ahead.total_hours() == behind.total_hours() == 5


@pytest.mark.parametrize(
    "delta",
    [
        timedelta(seconds=1),
        timedelta(minutes=7),
        timedelta(hours=2, minutes=10),
        timedelta(hours=9),
        timedelta(days=2),
        timedelta(weeks=3),
        timedelta(weeks=30),
        timedelta(days=1000),
    ],
)
def test_rendered_sign_matches_passed_flag(delta):
    """Test that 'ago' appears iff the target has passed."""
    future = Elapsed(REF + delta, REF)
    past = Elapsed(REF - delta, REF)

    assert not future.has_passed
    assert future.display().startswith("in ")
    assert not future.display().endswith(" ago")

    assert past.has_passed
    assert past.display().endswith(" ago")
    assert not past.display().startswith("in ")


def test_magnitudes_are_independent_truncations():
    """Test that each total is the whole count of the full difference."""
    elapsed = Elapsed(REF + timedelta(days=10, hours=3, seconds=30), REF)

    assert elapsed.total_weeks() == 1
    assert elapsed.total_days() == 10
    assert elapsed.total_hours() == 243
    assert elapsed.total_minutes() == 243 * 60
    assert elapsed.total_seconds() == 243 * 3600 + 30


def test_reference_defaults_to_clock():
    """Test that the injected clock supplies the default reference."""
    elapsed = Elapsed(REF + timedelta(days=2), clock=fixed_clock)

    assert elapsed.reference == REF
    assert elapsed.display() == "in 2d"


def test_rejects_naive_datetimes():
    """Test that naive instants are refused with a hint."""
    with pytest.raises(TypeError, match="timezone-aware"):
        Elapsed(datetime(2025, 1, 6, 12, 0), REF)

    with pytest.raises(TypeError, match="reference"):
        Elapsed(REF, datetime(2025, 1, 6, 12, 0))


def test_from_utc_localizes_naive_target():
    """Test construction from a naive UTC instant."""
    elapsed = Elapsed.from_utc(
        datetime(2025, 1, 6, 12, 30), REF, tz="Europe/Berlin"
    )

    assert elapsed.target.hour == 13
    assert elapsed.target.minute == 30
    assert elapsed.display() == "in 30min"


def test_from_utc_localizes_reference_too():
    """Test that an explicit reference is localized alongside the target."""
    elapsed = Elapsed.from_utc(
        datetime(2025, 1, 6, 18, 0), datetime(2025, 1, 6, 12, 0), tz="Asia/Tokyo"
    )

    assert elapsed.reference.utcoffset() == timedelta(hours=9)
    assert elapsed.display() == "in 6h"


def test_from_date_uses_midnight():
    """Test construction from a calendar date."""
    elapsed = Elapsed.from_date(date(2025, 1, 6), REF, tz="UTC")

    assert elapsed.target == datetime(2025, 1, 6, tzinfo=timezone.utc)
    assert elapsed.display() == "12h ago"


def test_from_date_with_clock():
    """Test a date target against the clock's now."""
    elapsed = Elapsed.from_date(date(2025, 1, 20), tz=timezone.utc, clock=fixed_clock)

    assert elapsed.display() == "in 1w"


def test_from_timestamp():
    """Test construction from Unix seconds."""
    elapsed = Elapsed.from_timestamp(int(REF.timestamp()) + 600, REF, tz="UTC")

    assert elapsed.display() == "in 10min"


def test_set_target_rebuilds_everything():
    """Test that replacing the target recomputes difference, flag and cache."""
    elapsed = Elapsed(REF + timedelta(minutes=20), REF)
    elapsed.set_target(REF - timedelta(weeks=6))

    assert elapsed.difference == -timedelta(weeks=6)
    assert elapsed.has_passed is True
    assert list(elapsed.components()) == [TimeUnit.MONTH, TimeUnit.WEEK]
    assert elapsed.display() == "1m 2w ago"


def test_set_reference_rebuilds_everything():
    """Test that replacing the reference recomputes difference, flag and cache."""
    elapsed = Elapsed(REF, REF - timedelta(hours=6))
    assert elapsed.display() == "in 6h"

    elapsed.set_reference(REF + timedelta(minutes=30))

    assert elapsed.difference == timedelta(minutes=-30)
    assert elapsed.display() == "30min ago"

    elapsed.set_reference(REF)
    assert elapsed.display() == "now"


def test_set_reference_rejects_naive():
    """Test that a failed mutation leaves the instance untouched."""
    elapsed = Elapsed(REF + timedelta(days=1), REF)

    with pytest.raises(TypeError):
        elapsed.set_reference(datetime(2025, 1, 1))

    assert elapsed.reference == REF
    assert elapsed.display() == "in 1d"


def test_set_date():
    """Test replacing the target with a calendar date."""
    elapsed = Elapsed(REF, REF)
    elapsed.set_date(date(2025, 1, 9), tz=timezone.utc)

    assert elapsed.target == datetime(2025, 1, 9, tzinfo=timezone.utc)
    assert elapsed.display() == "in 2d"


def test_refresh_rereads_clock():
    """Test that refresh moves the reference to the clock's now."""
    ticks = iter([REF, REF + timedelta(hours=1)])
    elapsed = Elapsed(REF + timedelta(days=1), clock=lambda: next(ticks))

    assert elapsed.display() == "in 1d"

    elapsed.refresh()

    assert elapsed.reference == REF + timedelta(hours=1)
    assert elapsed.display() == "in 23h"


def test_components_returns_a_snapshot():
    """Test that mutating the snapshot does not touch the instance."""
    elapsed = Elapsed(REF + timedelta(weeks=2), REF)
    snapshot = elapsed.components()
    snapshot[TimeUnit.YEAR] = Component("9y", 9)

    assert elapsed.components() == {TimeUnit.WEEK: Component("2w", 2)}
    assert elapsed.display() == "in 2w"


def test_unit_accessors_use_full_difference_and_leave_cache_alone():
    """Test standalone per-unit values."""
    elapsed = Elapsed(REF - timedelta(days=400), REF)

    assert elapsed.years() == Component("1y", 1)
    assert elapsed.months() == Component("14m", 14)
    assert elapsed.weeks() == Component("57w", 57)
    assert elapsed.days() == Component("400d", 400)
    assert elapsed.hours() == Component("9600h", 9600)
    assert elapsed.minutes() == Component("576000min", 576000)
    assert elapsed.seconds() == Component("34560000s", 34560000)
    assert elapsed.display() == "1y 2m ago"


def test_copy_is_independent():
    """Test that copies carry their own state."""
    original = Elapsed(REF + timedelta(minutes=20), REF)
    clone = original.copy()
    clone.set_target(REF + timedelta(days=3))

    assert original.display() == "in 20min"
    assert clone.display() == "in 3d"
    assert clone.reference == original.reference


def test_equality_and_ordering():
    """Test comparison by instants and signed difference."""
    soon = Elapsed(REF + timedelta(hours=1), REF)
    later = Elapsed(REF + timedelta(days=1), REF)
    earlier = Elapsed(REF - timedelta(days=1), REF)

    assert soon == Elapsed(REF + timedelta(hours=1), REF)
    assert soon != later
    assert earlier < soon < later
    assert sorted([later, earlier, soon]) == [earlier, soon, later]


def test_elapsed_is_unhashable():
    """Test that the mutable value cannot be hashed."""
    with pytest.raises(TypeError):
        hash(Elapsed(REF, REF))


def test_repr_shows_instants_and_phrase():
    """Test the debugging representation."""
    text = repr(Elapsed(REF + timedelta(minutes=20), REF))

    assert text.startswith("Elapsed(target=2025-01-06T12:20:00+00:00")
    assert "reference=2025-01-06T12:00:00+00:00" in text
    assert "display='in 20min'" in text


def test_difference_spans_spring_forward_in_one_zone():
    """Test that a skipped DST hour is not counted."""
    # Berlin clocks jump from 02:00 to 03:00 on 2025-03-30
    elapsed = Elapsed(
        datetime(2025, 3, 30, 4, 30, tzinfo=BERLIN),
        datetime(2025, 3, 30, 0, 30, tzinfo=BERLIN),
    )

    assert elapsed.difference == timedelta(hours=3)
    assert elapsed.total_seconds() == 10800
    assert elapsed.has_passed is False


def test_repeated_fall_back_hour_is_one_hour_apart():
    """Test that fold distinguishes the two 02:30s on 2025-10-26 in Berlin."""
    first = datetime(2025, 10, 26, 2, 30, tzinfo=BERLIN, fold=0)
    second = datetime(2025, 10, 26, 2, 30, tzinfo=BERLIN, fold=1)

    later = Elapsed(second, first)
    earlier = Elapsed(first, second)

    assert later.difference == timedelta(hours=1)
    assert later.has_passed is False
    assert later.display() != "now"
    assert earlier.difference == timedelta(hours=-1)
    assert earlier.has_passed is True
    assert earlier < later


def test_from_date_across_dst_uses_real_elapsed_time():
    """Test that midnight-to-midnight over spring-forward is 23 hours."""
    elapsed = Elapsed.from_date(
        date(2025, 3, 31),
        datetime(2025, 3, 30, tzinfo=BERLIN),
        tz="Europe/Berlin",
    )

    assert elapsed.difference == timedelta(hours=23)
    assert elapsed.display() == "in 23h"
