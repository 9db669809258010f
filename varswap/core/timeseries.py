"""ObservationSeries: an immutable, date-keyed series of float fixings.

Entries are stored as a tuple of (date, value) pairs in strictly
increasing date order, which gives deterministic iteration, hashing and
serialization. Range extraction uses bisection on the date column.
"""

from __future__ import annotations

import math
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, final

from varswap.core.result import Err, Ok


@final
@dataclass(frozen=True, slots=True)
class ObservationSeries:
    """Ordered (date, value) fixings of an underlying.

    Invariants:
    - dates strictly increasing (no duplicates)
    - values are finite floats
    """

    _entries: tuple[tuple[date, float], ...]

    EMPTY: ClassVar[ObservationSeries]  # Assigned after class definition

    def __post_init__(self) -> None:
        for i in range(len(self._entries) - 1):
            if self._entries[i][0] >= self._entries[i + 1][0]:
                raise TypeError(
                    f"ObservationSeries: dates must be strictly increasing, but "
                    f"{self._entries[i][0]} >= {self._entries[i + 1][0]}"
                )

    @staticmethod
    def create(
        items: Mapping[date, float] | Iterable[tuple[date, float]],
    ) -> Ok[ObservationSeries] | Err[str]:
        """Build a series from a mapping or (date, value) pairs in any order.

        Duplicate dates, datetimes used as keys and non-finite values are
        rejected.
        """
        pairs = list(items.items()) if isinstance(items, Mapping) else list(items)
        seen: set[date] = set()
        entries: list[tuple[date, float]] = []
        for d, v in pairs:
            if isinstance(d, datetime) or not isinstance(d, date):
                return Err(f"ObservationSeries keys must be dates, got {type(d).__name__}")
            if d in seen:
                return Err(f"ObservationSeries: duplicate observation date {d}")
            try:
                value = float(v)
            except (TypeError, ValueError):
                return Err(f"ObservationSeries: value on {d} is not numeric: {v!r}")
            if not math.isfinite(value):
                return Err(f"ObservationSeries: value on {d} must be finite, got {v!r}")
            seen.add(d)
            entries.append((d, value))
        entries.sort(key=lambda e: e[0])
        return Ok(ObservationSeries(_entries=tuple(entries)))

    def sub_series(
        self, start: date, include_start: bool, end: date, include_end: bool,
    ) -> ObservationSeries:
        """Entries between start and end, each bound inclusive or exclusive."""
        dates = self.dates()
        lo = bisect_left(dates, start) if include_start else bisect_right(dates, start)
        hi = bisect_right(dates, end) if include_end else bisect_left(dates, end)
        if lo >= hi:
            return ObservationSeries.EMPTY
        return ObservationSeries(_entries=self._entries[lo:hi])

    def dates(self) -> tuple[date, ...]:
        return tuple(d for d, _ in self._entries)

    def values(self) -> tuple[float, ...]:
        """Values in date order."""
        return tuple(v for _, v in self._entries)

    def items(self) -> tuple[tuple[date, float], ...]:
        return self._entries

    def get(self, d: date, default: float | None = None) -> float | None:
        i = bisect_left(self.dates(), d)
        if i < len(self._entries) and self._entries[i][0] == d:
            return self._entries[i][1]
        return default

    def is_empty(self) -> bool:
        return not self._entries

    def __contains__(self, d: object) -> bool:
        return isinstance(d, date) and self.get(d) is not None

    def __iter__(self) -> Iterator[tuple[date, float]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


ObservationSeries.EMPTY = ObservationSeries(_entries=())
