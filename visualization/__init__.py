#!/usr/bin/env python3
"""
Visualization Module

This module renders yearly climate summaries and their trend results.
It consumes the engine's output tables and holds no analysis logic.
"""

from .plots.trend_plots import TrendPlotter

__all__ = [
    'TrendPlotter'
]
