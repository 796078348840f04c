"""Relative time between a target instant and a reference instant.

Elapsed keeps the signed difference, the passed flag and a component cache
consistent with each other: every mutation recomputes all three. The cache
is filled by an automatic, lossy breakdown that keeps only the one or two
most significant units, or by an explicit coarsest-first chain.
"""

import logging
from copy import copy as shallow_copy
from datetime import date, datetime, timedelta, timezone
from functools import total_ordering
from math import prod

from typing_extensions import override

from elapsed.cache import Component, ComponentCache, StaleChain, component
from elapsed.instants import (
    Clock,
    Zone,
    from_timestamp,
    local_now,
    localize,
    midnight,
    require_aware,
)
from elapsed.units import TimeUnit
from elapsed.util import (
    DAY,
    DAYS_PER_WEEK,
    HOUR,
    MINUTE,
    MONTHS_PER_YEAR,
    NOW_PHRASE,
    SECOND,
    WEEK,
    WEEKS_PER_MONTH,
    WEEKS_PER_YEAR,
)

logger = logging.getLogger(__name__)

# How many of a unit fit in the next coarser unit
_PARENT_FACTOR: dict[TimeUnit, int] = {
    TimeUnit.SECOND: MINUTE // SECOND,
    TimeUnit.MINUTE: HOUR // MINUTE,
    TimeUnit.HOUR: DAY // HOUR,
    TimeUnit.DAY: DAYS_PER_WEEK,
    TimeUnit.WEEK: WEEKS_PER_MONTH,
    TimeUnit.MONTH: MONTHS_PER_YEAR,
}


def _factor(unit: TimeUnit, coarser: TimeUnit) -> int:
    """Number of ``unit`` in one ``coarser`` under the month/year approximation."""
    return prod(_PARENT_FACTOR[TimeUnit(i)] for i in range(unit, coarser))


@total_ordering
class Elapsed:
    """A target instant described relative to a reference instant.

    Attributes:
        target: The instant being described
        reference: The instant giving context (defaults to the clock's now)
        difference: ``target - reference``; positive means the target is ahead
        has_passed: True iff ``target <= reference``
    """

    def __init__(
        self,
        target: datetime,
        reference: datetime | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        """Create an Elapsed for aware datetimes.

        Args:
            target: Timezone-aware instant to describe
            reference: Timezone-aware context instant; resolved from ``clock``
                when omitted
            clock: Callable returning the current aware datetime

        Raises:
            TypeError: If an instant is not a timezone-aware datetime
        """
        self._clock: Clock = clock or local_now
        self._target: datetime = require_aware(target, "target")
        if reference is None:
            reference = self._clock()
        self._reference: datetime = require_aware(reference, "reference")
        self._cache: ComponentCache = ComponentCache()
        self._generation: int = 0
        self._update()

    @classmethod
    def from_utc(
        cls,
        target: datetime,
        reference: datetime | None = None,
        *,
        tz: Zone = None,
        clock: Clock | None = None,
    ) -> "Elapsed":
        """Create an Elapsed from UTC instants, localized to ``tz``.

        Naive datetimes are read as UTC. ``tz`` defaults to the local zone.
        """
        if reference is not None:
            reference = localize(reference, tz)
        return cls(localize(target, tz), reference, clock=clock)

    @classmethod
    def from_date(
        cls,
        day: date,
        reference: datetime | None = None,
        *,
        tz: Zone = None,
        clock: Clock | None = None,
    ) -> "Elapsed":
        """Create an Elapsed whose target is midnight of ``day`` in ``tz``."""
        return cls(midnight(day, tz), reference, clock=clock)

    @classmethod
    def from_timestamp(
        cls,
        timestamp: int,
        reference: datetime | None = None,
        *,
        tz: Zone = None,
        clock: Clock | None = None,
    ) -> "Elapsed":
        """Create an Elapsed whose target is given in Unix seconds."""
        return cls(from_timestamp(timestamp, tz), reference, clock=clock)

    @property
    def target(self) -> datetime:
        return self._target

    @property
    def reference(self) -> datetime:
        return self._reference

    @property
    def difference(self) -> timedelta:
        return self._difference

    @property
    def has_passed(self) -> bool:
        return self._passed

    def set_reference(self, reference: datetime) -> None:
        """Replace the reference instant and rebuild the breakdown."""
        self._reference = require_aware(reference, "reference")
        self._update()

    def set_target(self, target: datetime) -> None:
        """Replace the target instant and rebuild the breakdown."""
        self._target = require_aware(target, "target")
        self._update()

    def set_date(self, day: date, *, tz: Zone = None) -> None:
        """Replace the target with midnight of ``day`` in ``tz``."""
        self.set_target(midnight(day, tz))

    def refresh(self) -> None:
        """Move the reference to the clock's current instant."""
        self.set_reference(self._clock())

    def _update(self) -> None:
        # Same-tzinfo arithmetic is wall-clock; compare instants in UTC
        target = self._target.astimezone(timezone.utc)
        reference = self._reference.astimezone(timezone.utc)
        self._difference = target - reference
        self._passed = target <= reference
        logger.debug(
            "Elapsed difference %s (passed=%s)", self._difference, self._passed
        )
        self.process()

    # Whole counts of the absolute difference, each truncated independently

    def total_seconds(self) -> int:
        return abs(self._difference) // timedelta(seconds=SECOND)

    def total_minutes(self) -> int:
        return self.total_seconds() // MINUTE

    def total_hours(self) -> int:
        return self.total_seconds() // HOUR

    def total_days(self) -> int:
        return self.total_seconds() // DAY

    def total_weeks(self) -> int:
        return self.total_seconds() // WEEK

    def _total(self, unit: TimeUnit) -> int:
        if unit is TimeUnit.YEAR:
            return self.total_weeks() // WEEKS_PER_YEAR
        if unit is TimeUnit.MONTH:
            return self.total_weeks() // WEEKS_PER_MONTH
        if unit is TimeUnit.WEEK:
            return self.total_weeks()
        if unit is TimeUnit.DAY:
            return self.total_days()
        if unit is TimeUnit.HOUR:
            return self.total_hours()
        if unit is TimeUnit.MINUTE:
            return self.total_minutes()
        if unit is TimeUnit.SECOND:
            return self.total_seconds()
        raise ValueError(
            f"Breakdown does not support {unit.label()}.\n"
            f"Supported units: seconds through years"
        )

    def process(self) -> None:
        """Replace the cache with the automatic breakdown.

        Exactly one band applies, checked coarsest first. Units finer than
        the chosen band's remainder are discarded. Chains started earlier
        become stale.
        """
        self._generation += 1
        self._cache.clear()
        weeks = self.total_weeks()
        days = self.total_days()
        hours = self.total_hours()
        minutes = self.total_minutes()
        seconds = self.total_seconds()

        if 0 < weeks < WEEKS_PER_MONTH:
            band = "weeks"
            self._record(TimeUnit.WEEK, weeks)
        elif weeks >= WEEKS_PER_MONTH:
            months = weeks // WEEKS_PER_MONTH
            if months < MONTHS_PER_YEAR:
                band = "months"
                self._record(TimeUnit.MONTH, months)
                self._record(TimeUnit.WEEK, weeks - months * WEEKS_PER_MONTH)
            else:
                # Weeks are dropped at year granularity
                band = "years"
                years = months // MONTHS_PER_YEAR
                self._record(TimeUnit.YEAR, years)
                self._record(TimeUnit.MONTH, months - years * MONTHS_PER_YEAR)
        elif days > 0:
            band = "days"
            self._record(TimeUnit.DAY, days)
        elif hours >= 4:
            band = "hours"
            self._record(TimeUnit.HOUR, hours)
        elif minutes >= 60:
            band = "minutes past the hour"
            self._record(TimeUnit.MINUTE, minutes - hours * 60)
        elif minutes >= 5:
            band = "minutes"
            self._record(TimeUnit.MINUTE, minutes)
        elif seconds > 0:
            # The minute slot is kept even when zero: "0min 3s"
            band = "seconds"
            self._record(TimeUnit.MINUTE, minutes)
            self._record(TimeUnit.SECOND, seconds - minutes * 60)
        else:
            band = "zero"

        logger.debug("Elapsed breakdown band %r: %r", band, self._cache)

    def _record(self, unit: TimeUnit, magnitude: int) -> None:
        self._cache.insert(unit, component(unit, magnitude))

    # Standalone per-unit values over the full difference

    def years(self) -> Component:
        return component(TimeUnit.YEAR, self._total(TimeUnit.YEAR))

    def months(self) -> Component:
        return component(TimeUnit.MONTH, self._total(TimeUnit.MONTH))

    def weeks(self) -> Component:
        return component(TimeUnit.WEEK, self._total(TimeUnit.WEEK))

    def days(self) -> Component:
        return component(TimeUnit.DAY, self._total(TimeUnit.DAY))

    def hours(self) -> Component:
        return component(TimeUnit.HOUR, self._total(TimeUnit.HOUR))

    def minutes(self) -> Component:
        return component(TimeUnit.MINUTE, self._total(TimeUnit.MINUTE))

    def seconds(self) -> Component:
        return component(TimeUnit.SECOND, self._total(TimeUnit.SECOND))

    def chain(self) -> "Chain":
        """Clear the cache and start a coarsest-first manual breakdown.

        Years count 52-week blocks while months count 4-week blocks, so a
        month remainder after years can exceed 11 (103 weeks is "1y 13m").
        The chain is only valid until the next mutation, ``process()`` or
        ``chain()`` call on this instance.

        Example:
            >>> str(elapsed.chain().years().months())
            'in 1y 2m'
        """
        self._generation += 1
        self._cache.clear()
        return Chain(self)

    def _record_chained(self, unit: TimeUnit) -> None:
        """Record ``unit`` net of the finest coarser unit already recorded.

        Raises:
            OutOfOrderInsertion: If an equal or finer unit is already recorded
        """
        total = self._total(unit)
        anchor = self._cache.finest()
        if anchor is not None and anchor > unit:
            total -= self._total(anchor) * _factor(unit, anchor)
        self._cache.insert_ordered(unit, component(unit, total))

    def components(self) -> dict[TimeUnit, Component]:
        """Snapshot of the populated cache slots, coarsest first."""
        return self._cache.snapshot()

    def display(self) -> str:
        """Render as ``"in ..."`` for future targets, ``"... ago"`` otherwise."""
        fragments = self._cache.fragments()
        if not fragments:
            return NOW_PHRASE
        joined = " ".join(fragments)
        if self._passed:
            return f"{joined} ago"
        return f"in {joined}"

    def copy(self) -> "Elapsed":
        """Return an independent Elapsed with its own cache."""
        clone = shallow_copy(self)
        clone._cache = self._cache.copy()
        return clone

    def _key(self) -> tuple[timedelta, datetime]:
        return (self._difference, self._target.astimezone(timezone.utc))

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Elapsed):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Elapsed") -> bool:
        if not isinstance(other, Elapsed):
            return NotImplemented
        return self._key() < other._key()

    __hash__ = None  # type: ignore[assignment]

    @override
    def __str__(self) -> str:
        return self.display()

    @override
    def __repr__(self) -> str:
        return (
            f"Elapsed(target={self._target.isoformat()}, "
            f"reference={self._reference.isoformat()}, "
            f"display={self.display()!r})"
        )


class Chain:
    """Fluent, order-enforcing breakdown bound to one Elapsed.

    Each call records a unit into the Elapsed's cache and returns the chain.
    Units must be requested coarsest first; otherwise OutOfOrderInsertion
    is raised. Once the Elapsed rebuilds its cache the chain raises
    StaleChain.
    """

    def __init__(self, elapsed: Elapsed) -> None:
        self._elapsed: Elapsed = elapsed
        self._generation: int = elapsed._generation

    @property
    def elapsed(self) -> Elapsed:
        return self._elapsed

    def years(self) -> "Chain":
        return self._then(TimeUnit.YEAR)

    def months(self) -> "Chain":
        return self._then(TimeUnit.MONTH)

    def weeks(self) -> "Chain":
        return self._then(TimeUnit.WEEK)

    def days(self) -> "Chain":
        return self._then(TimeUnit.DAY)

    def hours(self) -> "Chain":
        return self._then(TimeUnit.HOUR)

    def minutes(self) -> "Chain":
        return self._then(TimeUnit.MINUTE)

    def seconds(self) -> "Chain":
        return self._then(TimeUnit.SECOND)

    def _then(self, unit: TimeUnit) -> "Chain":
        if self._generation != self._elapsed._generation:
            raise StaleChain(
                f"Cannot record {unit.label()}: the Elapsed was rebuilt after "
                f"this chain started.\n"
                f"Hint: Start a new chain after mutating: elapsed.chain()..."
            )
        self._elapsed._record_chained(unit)
        return self

    def components(self) -> dict[TimeUnit, Component]:
        return self._elapsed.components()

    def display(self) -> str:
        return self._elapsed.display()

    @override
    def __str__(self) -> str:
        return self.display()
