"""
Sample City Dataset

Static in-memory fixtures backing every dashboard view. Loaded once at
import time and never mutated; services hand out the model instances as-is.
"""

from typing import List

from urbanpulse.models import (
    CityMetrics,
    Zone,
    CityAlert,
    TrendingEvent,
    BusinessZone,
    CrowdForecastSample,
    SafetyTrend,
    TrafficSample,
)


def _zone(id, name, crowd_level, safety, traffic, events, business, x, y) -> Zone:
    return Zone(
        id=id,
        name=name,
        crowd_level=crowd_level,
        safety_score=safety,
        traffic_level=traffic,
        active_events=events,
        business_activity=business,
        coordinates={'x': x, 'y': y},
    )


# ============================================
# City Overview
# ============================================

CITY_METRICS = CityMetrics(
    health_score=87,
    crowd_index=64,
    safety_index=92,
    traffic_intensity=58,
    active_alerts=7,
    population=2847563,
)


# ============================================
# City Zones
# ============================================

CITY_ZONES: List[Zone] = [
    _zone('1', 'Downtown Core', 'high', 78, 85, 5, 94, 45, 35),
    _zone('2', 'Tech District', 'moderate', 91, 62, 2, 88, 65, 25),
    _zone('3', 'Harbor Front', 'high', 85, 45, 8, 76, 30, 60),
    _zone('4', 'University Zone', 'critical', 88, 72, 12, 65, 75, 45),
    _zone('5', 'Financial Hub', 'moderate', 95, 78, 1, 98, 50, 50),
    _zone('6', 'Arts Quarter', 'low', 82, 35, 6, 71, 25, 40),
    _zone('7', 'Residential North', 'low', 94, 28, 0, 45, 55, 15),
    _zone('8', 'Industrial Park', 'low', 76, 55, 0, 82, 85, 65),
    _zone('9', 'Central Park', 'moderate', 89, 15, 4, 32, 40, 45),
    _zone('10', 'Shopping District', 'high', 86, 68, 3, 92, 55, 70),
]


# ============================================
# Active Alerts
# ============================================

ACTIVE_ALERTS: List[CityAlert] = [
    CityAlert(id='1', type='overcrowding', severity='high', title='Stadium Area Congestion',
              location='Downtown Core', time='5 min ago',
              description='Major sports event causing crowd buildup'),
    CityAlert(id='2', type='traffic', severity='medium', title='Highway Slowdown',
              location='Tech District Access', time='12 min ago',
              description='Accident reported, expect 20min delays'),
    CityAlert(id='3', type='event', severity='low', title='Concert Starting Soon',
              location='Harbor Front', time='30 min ago',
              description='Expect increased foot traffic'),
    CityAlert(id='4', type='safety', severity='high', title='Power Outage',
              location='Arts Quarter Block C', time='45 min ago',
              description='Street lights affected, crews dispatched'),
    CityAlert(id='5', type='emergency', severity='critical', title='Fire Response Active',
              location='Industrial Park', time='1 hour ago',
              description='Emergency services on scene'),
    CityAlert(id='6', type='overcrowding', severity='medium', title='University Event',
              location='University Zone', time='2 hours ago',
              description='Graduation ceremony in progress'),
    CityAlert(id='7', type='traffic', severity='low', title='Road Construction',
              location='Residential North', time='3 hours ago',
              description='Lane closures until 6 PM'),
]


# ============================================
# Trending Events
# ============================================

TRENDING_EVENTS: List[TrendingEvent] = [
    TrendingEvent(id='1', name='City Music Festival', location='Harbor Front', attendees=45000,
                  crowd_impact=92, popularity=98, start_time='4:00 PM', category='Music'),
    TrendingEvent(id='2', name='Tech Conference 2024', location='Tech District', attendees=12000,
                  crowd_impact=65, popularity=87, start_time='9:00 AM', category='Technology'),
    TrendingEvent(id='3', name='Food & Wine Expo', location='Downtown Core', attendees=8500,
                  crowd_impact=58, popularity=82, start_time='11:00 AM', category='Food'),
    TrendingEvent(id='4', name='Art Gallery Opening', location='Arts Quarter', attendees=2000,
                  crowd_impact=25, popularity=71, start_time='7:00 PM', category='Art'),
    TrendingEvent(id='5', name='Championship Finals', location='Downtown Core', attendees=55000,
                  crowd_impact=95, popularity=99, start_time='8:00 PM', category='Sports'),
]


# ============================================
# Business Hotspots
# ============================================

BUSINESS_HOTSPOTS: List[BusinessZone] = [
    BusinessZone(id='1', name='Financial Hub', foot_traffic=125000, profitability=98,
                 growth_rate=12.5, business_count=847),
    BusinessZone(id='2', name='Downtown Core', foot_traffic=98000, profitability=94,
                 growth_rate=8.2, business_count=1234),
    BusinessZone(id='3', name='Shopping District', foot_traffic=87000, profitability=91,
                 growth_rate=15.7, business_count=562),
    BusinessZone(id='4', name='Tech District', foot_traffic=65000, profitability=89,
                 growth_rate=22.3, business_count=328),
    BusinessZone(id='5', name='Harbor Front', foot_traffic=54000, profitability=85,
                 growth_rate=18.1, business_count=276),
]


# ============================================
# Time Series Samples
# ============================================

CROWD_FORECAST_SAMPLE: List[CrowdForecastSample] = [
    CrowdForecastSample(hour=hour, predicted=predicted, actual=actual, zone='Downtown')
    for hour, predicted, actual in [
        ('00:00', 15, 14), ('02:00', 8, 9), ('04:00', 5, 4), ('06:00', 12, 15),
        ('08:00', 45, 52), ('10:00', 68, 65), ('12:00', 85, 88), ('14:00', 78, 75),
        ('16:00', 82, 80), ('18:00', 92, 95), ('20:00', 75, 72), ('22:00', 45, 48),
    ]
]

SAFETY_TREND: List[SafetyTrend] = [
    SafetyTrend(date=date, score=score, incidents=incidents)
    for date, score, incidents in [
        ('Mon', 88, 12), ('Tue', 91, 8), ('Wed', 85, 15), ('Thu', 92, 6),
        ('Fri', 87, 14), ('Sat', 78, 22), ('Sun', 94, 5),
    ]
]

TRAFFIC_BY_HOUR: List[TrafficSample] = [
    TrafficSample(hour=f"{hour:02d}:00", intensity=intensity)
    for hour, intensity in zip(
        range(6, 22),
        [25, 45, 78, 85, 65, 58, 72, 68, 55, 62, 75, 92, 88, 65, 45, 32]
    )
]
