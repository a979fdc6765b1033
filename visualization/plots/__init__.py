#!/usr/bin/env python3
"""
Trend Plots Module

Plotters for yearly climate series and their trend results.
"""

from .base import BasePlotter
from .trend_plots import TrendPlotter

__all__ = [
    'BasePlotter',
    'TrendPlotter'
]
