"""
Crowd Series Synthesis

Turns the crowd baseline of the nearby zones into the time series shown on
the crowd forecast view:

- hourly_series: short-horizon crowd levels with "best time" flags
- forecast_series: 24 hour predicted vs. actual crowd levels
- best_times: least crowded windows paired with nearby zones

All functions are pure apart from the random source, which is passed in.
Any object with a random() -> float in [0, 1) works; numpy Generators and
random.Random both qualify.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from urbanpulse.models import CROWD_LEVEL_WEIGHTS
from urbanpulse.forecast.errors import EmptyZoneSet
from urbanpulse.forecast.geo import NearbyZone
from urbanpulse.forecast.diurnal import DiurnalProfile, HOURLY_PROFILE, FORECAST_PROFILE


MIN_CROWD_PERCENT = 5
MAX_CROWD_PERCENT = 100

# Crowd below this level is flagged as a good time to visit
RECOMMENDED_THRESHOLD = 30

HOURLY_NOISE = 15.0
ACTUAL_NOISE_NOW = 10.0
ACTUAL_NOISE_LATER = 15.0

FORECAST_LENGTH = 24
BEST_TIME_WINDOW_HOURS = 2

BEST_TIME_REASONS = [
    'Lowest crowd density',
    'Off-peak period',
    'Quiet time',
    'Best conditions',
    'Optimal timing',
]

LIVE_TRAFFIC_NOISE = 20.0
LIVE_TRAFFIC_MIN = 10
LIVE_TRAFFIC_MAX = 100


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)"""

    def random(self) -> float:
        ...


@dataclass
class HourlyPoint:
    """Crowd level for one hour of the short-horizon series"""
    hour_label: str
    crowd_percent: int
    is_recommended: bool
    hour_of_day: int

    def to_dict(self) -> dict:
        return {
            'hour': self.hour_label,
            'crowd': self.crowd_percent,
            'best': self.is_recommended,
            'hourValue': self.hour_of_day
        }


@dataclass
class ForecastPoint:
    """Predicted and observed crowd level for one hour"""
    hour_label: str
    predicted_percent: int
    actual_percent: int
    zone_label: str

    def to_dict(self) -> dict:
        return {
            'hour': self.hour_label,
            'predicted': self.predicted_percent,
            'actual': self.actual_percent,
            'zone': self.zone_label
        }


@dataclass
class BestTimeSlot:
    """Suggested visiting window"""
    window_label: str
    zone_name: str
    distance_km: str
    reason: str

    def to_dict(self) -> dict:
        return {
            'time': self.window_label,
            'location': self.zone_name,
            'distance': self.distance_km,
            'reason': self.reason
        }


def resolve_rng(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else np.random.default_rng()


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _to_percent(value: float) -> int:
    """Clamp to the displayable crowd range and round"""
    clipped = min(MAX_CROWD_PERCENT, max(MIN_CROWD_PERCENT, value))
    return _round_half_up(clipped)


def _symmetric(rng: RandomSource, amplitude: float) -> float:
    """Uniform swing in [-amplitude/2, amplitude/2)"""
    return (rng.random() - 0.5) * amplitude


def _banded_crowd(baseline: float, hour: int, profile: DiurnalProfile,
                  rng: RandomSource) -> float:
    band = profile.band_for_hour(hour)
    return baseline * band.multiplier + rng.random() * band.jitter - band.jitter / 2


def hour_label_12h(hour: int) -> str:
    """Compact 12-hour label, e.g. 9AM, 12PM"""
    hour12 = 12 if hour % 12 == 0 else hour % 12
    return f"{hour12}{'PM' if hour >= 12 else 'AM'}"


def format_clock_12h(hour: int) -> str:
    """12-hour clock time on the hour, e.g. 9:00 AM"""
    hour12 = 12 if hour % 12 == 0 else hour % 12
    return f"{hour12}:00 {'PM' if hour >= 12 else 'AM'}"


def format_window_label(start_hour: int, span: int = BEST_TIME_WINDOW_HOURS) -> str:
    """Window label such as '11:00 PM - 1:00 AM'"""
    start = start_hour % 24
    end = (start + span) % 24
    return f"{format_clock_12h(start)} - {format_clock_12h(end)}"


def aggregate_baseline(zones: Sequence[NearbyZone]) -> float:
    """
    Mean crowd percentage implied by the zones' crowd levels

    Raises:
        EmptyZoneSet: if zones is empty
    """
    if not zones:
        raise EmptyZoneSet("Cannot aggregate a crowd baseline from zero zones")

    weights = [CROWD_LEVEL_WEIGHTS[z.zone.crowd_level] for z in zones]
    return float(np.mean(weights))


def hourly_series(baseline: float,
                  start_hour: int,
                  length: int = 9,
                  rng: Optional[RandomSource] = None) -> List[HourlyPoint]:
    """
    Short-horizon crowd series starting at `start_hour`

    Args:
        baseline: Aggregate crowd baseline (see aggregate_baseline)
        start_hour: First hour of the series, taken modulo 24
        length: Number of hourly points; non-positive gives an empty series
        rng: Random source

    Returns:
        HourlyPoints in chronological order
    """
    rng = resolve_rng(rng)
    points = []

    for offset in range(max(0, length)):
        hour = (start_hour + offset) % 24
        crowd = _banded_crowd(baseline, hour, HOURLY_PROFILE, rng)
        crowd_percent = _to_percent(crowd + _symmetric(rng, HOURLY_NOISE))

        points.append(HourlyPoint(
            hour_label=hour_label_12h(hour),
            crowd_percent=crowd_percent,
            is_recommended=crowd_percent < RECOMMENDED_THRESHOLD,
            hour_of_day=hour
        ))

    return points


def forecast_series(baseline: float,
                    start_hour: int,
                    zone_label: str,
                    rng: Optional[RandomSource] = None) -> List[ForecastPoint]:
    """
    24 hour predicted/actual crowd series starting at `start_hour`

    `actual` is an independent draw around the predicted value, tighter for
    the current hour than for later ones.
    """
    rng = resolve_rng(rng)
    points = []

    for offset in range(FORECAST_LENGTH):
        hour = (start_hour + offset) % 24
        predicted = _banded_crowd(baseline, hour, FORECAST_PROFILE, rng)
        noise = ACTUAL_NOISE_NOW if offset == 0 else ACTUAL_NOISE_LATER
        actual = predicted + _symmetric(rng, noise)

        points.append(ForecastPoint(
            hour_label=f"{hour:02d}:00",
            predicted_percent=_to_percent(predicted),
            actual_percent=_to_percent(actual),
            zone_label=zone_label
        ))

    return points


def best_times(hourly: Sequence[HourlyPoint],
               zones: Sequence[NearbyZone],
               top_n: int = 3) -> List[BestTimeSlot]:
    """
    Least crowded hours as two-hour visiting windows

    Zones are handed out round-robin by rank, not matched to the hour.

    Raises:
        EmptyZoneSet: if zones is empty
    """
    if not zones:
        raise EmptyZoneSet("Cannot rank best times without any zones")

    ranked = sorted(hourly, key=lambda p: p.crowd_percent)[:max(0, top_n)]
    slots = []

    for rank, point in enumerate(ranked):
        zone = zones[rank % len(zones)]
        slots.append(BestTimeSlot(
            window_label=format_window_label(point.hour_of_day),
            zone_name=zone.name,
            distance_km=f"{zone.distance_km:.1f}",
            reason=BEST_TIME_REASONS[rank % len(BEST_TIME_REASONS)]
        ))

    return slots


def live_zone_traffic(zones: Sequence[NearbyZone],
                      rng: Optional[RandomSource] = None,
                      limit: int = 4) -> List[NearbyZone]:
    """
    Nearby zones with a live swing applied to their traffic level

    Returns copies; the static zones are left untouched.
    """
    rng = resolve_rng(rng)
    live = []

    for nearby in list(zones)[:max(0, limit)]:
        swing = _round_half_up(_symmetric(rng, LIVE_TRAFFIC_NOISE))
        traffic = min(LIVE_TRAFFIC_MAX, max(LIVE_TRAFFIC_MIN, nearby.zone.traffic_level + swing))
        live.append(NearbyZone(
            zone=nearby.zone.model_copy(update={'traffic_level': traffic}),
            distance_km=nearby.distance_km,
            lat=nearby.lat,
            lng=nearby.lng
        ))

    return live
