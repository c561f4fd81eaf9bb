"""
Crowd Series Tests

Tests for:
- Crowd baseline aggregation
- Hourly short-horizon series
- 24 hour predicted/actual series
- Best-time ranking and labels
- Live zone traffic
"""

import random

import numpy as np
import pytest

from urbanpulse.data import CITY_ZONES
from urbanpulse.models import CrowdLevel
from urbanpulse.forecast.errors import EmptyZoneSet
from urbanpulse.forecast.geo import NearbyZone
from urbanpulse.forecast.series import (
    BEST_TIME_REASONS,
    HourlyPoint,
    aggregate_baseline,
    best_times,
    forecast_series,
    format_window_label,
    hour_label_12h,
    hourly_series,
    live_zone_traffic,
)


class ConstantRandom:
    """Random source that always returns the same value"""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def _nearby(zone, distance_km=0.0):
    return NearbyZone(zone=zone, distance_km=distance_km, lat=0.0, lng=0.0)


def _zone_by_name(name):
    return next(z for z in CITY_ZONES if z.name == name)


def _hourly(crowds, start_hour=8):
    return [
        HourlyPoint(
            hour_label=hour_label_12h(start_hour + i),
            crowd_percent=crowd,
            is_recommended=crowd < 30,
            hour_of_day=start_hour + i
        )
        for i, crowd in enumerate(crowds)
    ]


# ============================================
# Baseline Tests
# ============================================

class TestAggregateBaseline:
    """Tests for crowd baseline aggregation"""

    def test_low_and_critical_average(self):
        zones = [_nearby(_zone_by_name("Arts Quarter")), _nearby(_zone_by_name("University Zone"))]
        assert aggregate_baseline(zones) == 60.0

    @pytest.mark.parametrize("level,expected", [
        (CrowdLevel.LOW, 25.0),
        (CrowdLevel.MODERATE, 50.0),
        (CrowdLevel.HIGH, 75.0),
        (CrowdLevel.CRITICAL, 95.0),
    ])
    def test_single_level(self, level, expected):
        zone = CITY_ZONES[0].model_copy(update={'crowd_level': level})
        assert aggregate_baseline([_nearby(zone)]) == expected

    def test_bounds_for_every_mix(self):
        levels = list(CrowdLevel)
        for a in levels:
            for b in levels:
                for c in levels:
                    zones = [_nearby(CITY_ZONES[0].model_copy(update={'crowd_level': lvl}))
                             for lvl in (a, b, c)]
                    assert 25.0 <= aggregate_baseline(zones) <= 95.0

    def test_empty_raises(self):
        with pytest.raises(EmptyZoneSet):
            aggregate_baseline([])


# ============================================
# Hourly Series Tests
# ============================================

class TestHourlySeries:
    """Tests for the short-horizon crowd series"""

    @pytest.mark.parametrize("length", [1, 9, 24, 30])
    def test_length(self, length):
        series = hourly_series(60.0, 9, length, np.random.default_rng(1))
        assert len(series) == length

    @pytest.mark.parametrize("length", [0, -3])
    def test_non_positive_length_is_empty(self, length):
        assert hourly_series(60.0, 9, length, np.random.default_rng(1)) == []

    @pytest.mark.parametrize("baseline", [25.0, 60.0, 95.0])
    @pytest.mark.parametrize("seed", range(5))
    def test_bounds(self, baseline, seed):
        series = hourly_series(baseline, 0, 24, np.random.default_rng(seed))
        assert all(5 <= p.crowd_percent <= 100 for p in series)

    def test_clamped_at_both_ends(self):
        rng = np.random.default_rng(3)
        assert all(p.crowd_percent == 100 for p in hourly_series(1000.0, 0, 24, rng))
        assert all(p.crowd_percent == 5 for p in hourly_series(-1000.0, 0, 24, rng))

    def test_hour_wraparound(self):
        series = hourly_series(60.0, 22, 9, np.random.default_rng(0))
        assert [p.hour_of_day for p in series] == [22, 23, 0, 1, 2, 3, 4, 5, 6]

    def test_start_hour_taken_modulo_24(self):
        series = hourly_series(60.0, 25, 3, np.random.default_rng(0))
        assert [p.hour_of_day for p in series] == [1, 2, 3]

    @pytest.mark.parametrize("seed", range(10))
    def test_recommended_flag_consistent(self, seed):
        for baseline in (25.0, 50.0, 95.0):
            for p in hourly_series(baseline, seed, 12, np.random.default_rng(seed)):
                assert p.is_recommended == (p.crowd_percent < 30)

    def test_band_multipliers_without_jitter(self):
        """A random source at 0.5 cancels every centred swing"""
        series = hourly_series(60.0, 9, 2, ConstantRandom(0.5))
        assert series[0].crowd_percent == 42      # morning rush, 0.70
        assert series[1].crowd_percent == 54      # midday, 0.90

    def test_night_is_recommended(self):
        point = hourly_series(60.0, 23, 1, ConstantRandom(0.5))[0]
        assert point.crowd_percent == 24          # night, 0.40
        assert point.is_recommended

    def test_hour_labels(self):
        series = hourly_series(60.0, 11, 3, np.random.default_rng(0))
        assert [p.hour_label for p in series] == ["11AM", "12PM", "1PM"]

    def test_seeded_runs_match(self):
        a = hourly_series(60.0, 7, 9, np.random.default_rng(42))
        b = hourly_series(60.0, 7, 9, np.random.default_rng(42))
        assert [p.to_dict() for p in a] == [p.to_dict() for p in b]

    def test_accepts_stdlib_random(self):
        series = hourly_series(60.0, 7, 9, random.Random(5))
        assert len(series) == 9

    def test_to_dict(self):
        data = hourly_series(60.0, 9, 1, ConstantRandom(0.5))[0].to_dict()
        assert data == {'hour': '9AM', 'crowd': 42, 'best': False, 'hourValue': 9}


# ============================================
# 24 Hour Forecast Tests
# ============================================

class TestForecastSeries:
    """Tests for the predicted/actual series"""

    @pytest.mark.parametrize("seed", range(5))
    def test_length_and_bounds(self, seed):
        series = forecast_series(75.0, seed * 5, "Downtown", np.random.default_rng(seed))
        assert len(series) == 24
        for p in series:
            assert 5 <= p.predicted_percent <= 100
            assert 5 <= p.actual_percent <= 100

    def test_hour_labels_wrap(self):
        series = forecast_series(60.0, 22, "Here", np.random.default_rng(0))
        assert [p.hour_label for p in series[:4]] == ["22:00", "23:00", "00:00", "01:00"]

    def test_zone_label_on_every_point(self):
        series = forecast_series(60.0, 0, "Harbor Front", np.random.default_rng(0))
        assert all(p.zone_label == "Harbor Front" for p in series)

    def test_band_multipliers_without_jitter(self):
        series = forecast_series(60.0, 19, "Here", ConstantRandom(0.5))
        assert series[0].predicted_percent == 69  # evening peak, 1.15
        assert series[0].actual_percent == 69
        assert series[3].predicted_percent == 30  # night, 0.50

    def test_actual_swing_tighter_for_current_hour(self):
        # midday band: predicted = 40 + 0.99 * 20 - 10 = 49.8
        # swing is (0.99 - 0.5) * amplitude: 4.9 now, 7.35 later
        series = forecast_series(40.0, 10, "Here", ConstantRandom(0.99))
        assert (series[0].predicted_percent, series[0].actual_percent) == (50, 55)
        assert (series[1].predicted_percent, series[1].actual_percent) == (50, 57)

    def test_actual_swing_downward(self):
        # predicted = 30; actual = 25 now, 22.5 later
        series = forecast_series(40.0, 10, "Here", ConstantRandom(0.0))
        assert (series[0].predicted_percent, series[0].actual_percent) == (30, 25)
        assert (series[1].predicted_percent, series[1].actual_percent) == (30, 23)

    def test_actual_stays_near_predicted(self):
        """Actual is a swing of at most 7.5 around the unrounded prediction"""
        series = forecast_series(60.0, 0, "Here", np.random.default_rng(11))
        assert all(abs(p.actual_percent - p.predicted_percent) <= 9 for p in series)

    def test_to_dict(self):
        data = forecast_series(60.0, 19, "Here", ConstantRandom(0.5))[0].to_dict()
        assert data == {'hour': '19:00', 'predicted': 69, 'actual': 69, 'zone': 'Here'}


# ============================================
# Best Time Tests
# ============================================

class TestBestTimes:
    """Tests for best-time ranking"""

    @pytest.fixture
    def zones(self):
        return [
            _nearby(_zone_by_name("Central Park"), 3.14159),
            _nearby(_zone_by_name("Arts Quarter"), 7.0),
        ]

    def test_three_slots_in_ascending_crowd_order(self, zones):
        hourly = _hourly([50, 20, 70, 10, 40, 90, 30, 60, 80])
        slots = best_times(hourly, zones)

        assert len(slots) == 3
        assert [s.window_label for s in slots] == [
            "11:00 AM - 1:00 PM",
            "9:00 AM - 11:00 AM",
            "2:00 PM - 4:00 PM",
        ]

    def test_zones_assigned_round_robin(self, zones):
        slots = best_times(_hourly([50, 20, 70, 10, 40]), zones)
        assert [s.zone_name for s in slots] == ["Central Park", "Arts Quarter", "Central Park"]

    def test_reasons_follow_rank(self, zones):
        slots = best_times(_hourly(list(range(10, 100, 10))), zones, top_n=7)
        assert [s.reason for s in slots[:5]] == BEST_TIME_REASONS
        assert slots[5].reason == BEST_TIME_REASONS[0]

    def test_distance_formatted_one_decimal(self, zones):
        slot = best_times(_hourly([10]), zones)[0]
        assert slot.distance_km == "3.1"

    def test_ties_keep_chronological_order(self, zones):
        slots = best_times(_hourly([40, 40, 40, 40]), zones)
        assert [s.window_label for s in slots] == [
            "8:00 AM - 10:00 AM",
            "9:00 AM - 11:00 AM",
            "10:00 AM - 12:00 PM",
        ]

    def test_top_n_larger_than_series(self, zones):
        assert len(best_times(_hourly([30, 20]), zones, top_n=5)) == 2

    def test_hourly_not_reordered(self, zones):
        hourly = _hourly([50, 20, 70])
        before = [p.crowd_percent for p in hourly]
        best_times(hourly, zones)
        assert [p.crowd_percent for p in hourly] == before

    def test_empty_zones_raises(self):
        with pytest.raises(EmptyZoneSet):
            best_times(_hourly([10, 20]), [])

    def test_to_dict(self, zones):
        data = best_times(_hourly([10]), zones)[0].to_dict()
        assert data == {
            'time': "8:00 AM - 10:00 AM",
            'location': "Central Park",
            'distance': "3.1",
            'reason': BEST_TIME_REASONS[0],
        }


class TestLabels:
    """Tests for hour and window labels"""

    @pytest.mark.parametrize("hour,label", [(0, "12AM"), (9, "9AM"), (12, "12PM"), (15, "3PM"), (23, "11PM")])
    def test_hour_label(self, hour, label):
        assert hour_label_12h(hour) == label

    def test_window_wraps_past_midnight(self):
        assert format_window_label(23) == "11:00 PM - 1:00 AM"

    def test_window_ending_at_midnight(self):
        assert format_window_label(22) == "10:00 PM - 12:00 AM"

    def test_window_ending_at_noon(self):
        assert format_window_label(10) == "10:00 AM - 12:00 PM"


# ============================================
# Live Traffic Tests
# ============================================

class TestLiveZoneTraffic:
    """Tests for the live traffic swing"""

    @pytest.fixture
    def nearby(self):
        return [_nearby(z) for z in CITY_ZONES]

    def test_limit(self, nearby):
        assert len(live_zone_traffic(nearby, np.random.default_rng(0))) == 4
        assert len(live_zone_traffic(nearby, np.random.default_rng(0), limit=2)) == 2

    def test_no_swing_at_midpoint(self, nearby):
        live = live_zone_traffic(nearby, ConstantRandom(0.5))
        assert [z.zone.traffic_level for z in live] == [z.zone.traffic_level for z in nearby[:4]]

    def test_swing_up_and_clamp(self):
        park = [_nearby(_zone_by_name("Central Park"))]     # traffic 15
        assert live_zone_traffic(park, ConstantRandom(0.99))[0].zone.traffic_level == 25
        assert live_zone_traffic(park, ConstantRandom(0.0))[0].zone.traffic_level == 10

    def test_upper_clamp(self):
        busy = [_nearby(CITY_ZONES[0].model_copy(update={'traffic_level': 98}))]
        assert live_zone_traffic(busy, ConstantRandom(0.99))[0].zone.traffic_level == 100

    def test_static_zone_unchanged(self, nearby):
        live_zone_traffic(nearby, ConstantRandom(0.99))
        assert _zone_by_name("Central Park").traffic_level == 15
