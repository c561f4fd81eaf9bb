"""
UrbanPulse Smart City Backend
Backend Application Package

Serves the UrbanPulse dashboard: static city sample data, location-aware
crowd forecasts, and live forecast updates over Socket.IO.
"""

__version__ = "1.0.0"
__author__ = "UrbanPulse Team"
