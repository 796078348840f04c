"""Fixed-slot storage for rendered unit components.

One optional slot per TimeUnit, indexed by the unit's ordinal. Iteration
always runs coarsest to finest regardless of insertion order.
"""

from collections.abc import Iterator
from typing import NamedTuple

from elapsed.units import TimeUnit


class OutOfOrderInsertion(RuntimeError):
    """Raised when a unit is recorded after an equal or finer unit.

    Signals misuse of the chained breakdown API, not bad input data.
    """


class StaleChain(OutOfOrderInsertion):
    """Raised when a chain is used after its Elapsed rebuilt the cache."""


class Component(NamedTuple):
    fragment: str
    magnitude: int


def component(unit: TimeUnit, magnitude: int) -> Component:
    """Build the ``"{magnitude}{abbreviation}"`` component for a unit."""
    if magnitude < 0:
        raise ValueError(
            f"Component magnitude must be non-negative, got {magnitude} "
            f"for {unit.label()}"
        )
    return Component(f"{magnitude}{unit.short_abbreviation()}", magnitude)


class ComponentCache:
    """Per-unit slots holding the components chosen by a breakdown."""

    def __init__(self) -> None:
        self._slots: list[Component | None] = [None] * len(TimeUnit)

    def __getitem__(self, unit: TimeUnit) -> Component | None:
        return self._slots[unit]

    def __contains__(self, unit: TimeUnit) -> bool:
        return self._slots[unit] is not None

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def __iter__(self) -> Iterator[TimeUnit]:
        """Yield populated units from coarsest to finest."""
        for unit in sorted(TimeUnit, reverse=True):
            if self._slots[unit] is not None:
                yield unit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComponentCache):
            return NotImplemented
        return self._slots == other._slots

    def __repr__(self) -> str:
        inner = ", ".join(f"{unit.name}={self._slots[unit]!r}" for unit in self)
        return f"ComponentCache({inner})"

    def insert(self, unit: TimeUnit, value: Component) -> None:
        """Store a component, replacing any previous value for the unit."""
        self._slots[unit] = value

    def insert_ordered(self, unit: TimeUnit, value: Component) -> None:
        """Store a component only if every recorded unit is coarser.

        Raises:
            OutOfOrderInsertion: If an equal or finer unit is already stored.
        """
        finest = self.finest()
        if finest is not None and finest <= unit:
            raise OutOfOrderInsertion(
                f"Cannot record {unit.label()} after {finest.label()}.\n"
                f"Units must be recorded from coarsest to finest.\n"
                f"Example: elapsed.chain().years().months().weeks()"
            )
        self._slots[unit] = value

    def finest(self) -> TimeUnit | None:
        """Return the finest populated unit, or None if the cache is empty."""
        for unit in TimeUnit:
            if self._slots[unit] is not None:
                return unit
        return None

    def clear(self) -> None:
        self._slots = [None] * len(TimeUnit)

    def copy(self) -> "ComponentCache":
        clone = ComponentCache()
        clone._slots = list(self._slots)
        return clone

    def snapshot(self) -> dict[TimeUnit, Component]:
        """Return populated slots as a new dict, coarsest first."""
        return {unit: self._slots[unit] for unit in self}  # type: ignore[misc]

    def fragments(self) -> list[str]:
        return [self._slots[unit].fragment for unit in self]  # type: ignore[union-attr]
