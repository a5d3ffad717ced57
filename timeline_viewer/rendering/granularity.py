"""
Granularity - The ten calendar units the timeline axis can display.

Ordered from coarsest (MILLENNIUM) to finest (MILLISECOND). The order defines
the coarser/finer neighbours walked by the scale transition state machine.
"""

from enum import IntEnum
from typing import Optional

from timeline_viewer.utils.calendar_date import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE, MS_PER_SECOND
from timeline_viewer.utils.errors import GranularityError


class Granularity(IntEnum):
    """Calendar display unit of the timeline axis."""

    MILLENNIUM = 0
    CENTURY = 1
    DECADE = 2
    YEAR = 3
    MONTH = 4
    DAY = 5
    HOUR = 6
    MINUTE = 7
    SECOND = 8
    MILLISECOND = 9

    @classmethod
    def from_name(cls, name) -> 'Granularity':
        """
        Look up a granularity by name.

        Accepts the member names case-insensitively, plus ``"date"`` as an
        alias for DAY (the name used by timeline documents).

        Args:
            name: Granularity name or an existing Granularity

        Returns:
            Granularity: Matching member

        Raises:
            GranularityError: If the name is not one of the ten units
        """
        if isinstance(name, Granularity):
            return name
        if not isinstance(name, str):
            raise GranularityError(name)
        key = name.strip().upper()
        if key == 'DATE':
            return cls.DAY
        try:
            return cls[key]
        except KeyError:
            raise GranularityError(name) from None

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def coarser(self) -> Optional['Granularity']:
        """Next coarser unit, or None at MILLENNIUM."""
        if self is Granularity.MILLENNIUM:
            return None
        return Granularity(self.value - 1)

    @property
    def finer(self) -> Optional['Granularity']:
        """Next finer unit, or None at MILLISECOND."""
        if self is Granularity.MILLISECOND:
            return None
        return Granularity(self.value + 1)

    @property
    def is_year_like(self) -> bool:
        return self <= Granularity.YEAR

    @property
    def unit_years(self) -> int:
        """Years per unit for the year-like granularities."""
        return _UNIT_YEARS[self]

    @property
    def unit_ms(self) -> int:
        """Fixed unit length in milliseconds for DAY and finer."""
        return _UNIT_MS[self]

    @property
    def is_fixed_length(self) -> bool:
        """True for units whose length never varies (DAY and finer, ignoring leap seconds)."""
        return self >= Granularity.DAY


_UNIT_YEARS = {
    Granularity.MILLENNIUM: 1000,
    Granularity.CENTURY: 100,
    Granularity.DECADE: 10,
    Granularity.YEAR: 1,
}

_UNIT_MS = {
    Granularity.DAY: MS_PER_DAY,
    Granularity.HOUR: MS_PER_HOUR,
    Granularity.MINUTE: MS_PER_MINUTE,
    Granularity.SECOND: MS_PER_SECOND,
    Granularity.MILLISECOND: 1,
}
