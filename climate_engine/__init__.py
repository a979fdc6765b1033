"""
Climate Trend Engine - Core Module

This module contains the batch pipeline that turns one station's daily
climate record into annual, seasonal and extreme-event summaries and tests
each of them for trends.
"""

from .engine import ClimateTrendEngine

__version__ = "1.0.0"
__author__ = "Station Climate Trend Analysis"

__all__ = ['ClimateTrendEngine']
