"""
Diurnal Crowd Patterns

Hour-of-day bands used to shape the synthetic crowd series. Each band scales
the zone baseline and adds a bounded random swing.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DiurnalBand:
    """Multiplier and jitter for a range of local hours"""
    name: str
    hours: Tuple[int, ...]
    multiplier: float
    jitter: float                         # amplitude of the uniform swing

    def contains(self, hour: int) -> bool:
        return hour in self.hours


def _hours(start: int, end: int) -> Tuple[int, ...]:
    """Hours in [start, end), wrapping past midnight"""
    if start <= end:
        return tuple(range(start, end))
    return tuple(range(start, 24)) + tuple(range(0, end))


@dataclass(frozen=True)
class DiurnalProfile:
    """Ordered bands plus the fallback used when no band matches"""
    bands: Tuple[DiurnalBand, ...]
    fallback: DiurnalBand

    def band_for_hour(self, hour: int) -> DiurnalBand:
        for band in self.bands:
            if band.contains(hour):
                return band
        return self.fallback


# Short-horizon (9 hour) crowd series
HOURLY_PROFILE = DiurnalProfile(
    bands=(
        DiurnalBand("morning_rush", _hours(6, 10), 0.70, 25),
        DiurnalBand("midday", _hours(10, 14), 0.90, 20),
        DiurnalBand("afternoon", _hours(14, 18), 0.80, 25),
        DiurnalBand("evening_peak", _hours(18, 22), 1.10, 20),
        DiurnalBand("night", _hours(22, 6), 0.40, 20),
    ),
    fallback=DiurnalBand("baseline", (), 0.60, 0),
)

# 24 hour predicted/actual series
FORECAST_PROFILE = DiurnalProfile(
    bands=(
        DiurnalBand("morning_rush", _hours(6, 10), 0.80, 20),
        DiurnalBand("midday", _hours(10, 14), 1.00, 20),
        DiurnalBand("afternoon", _hours(14, 18), 0.85, 25),
        DiurnalBand("evening_peak", _hours(18, 22), 1.15, 15),
        DiurnalBand("night", _hours(22, 6), 0.50, 15),
    ),
    fallback=DiurnalBand("baseline", (), 0.70, 0),
)
