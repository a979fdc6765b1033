#!/usr/bin/env python3
"""
Core Analysis Module

Extreme event metrics, the OLS and Mann-Kendall trend estimators, and the
assembler that turns their outputs into one comparable results table.
"""

from .extreme_events import (
    ExtremeEventDetector,
    FREEZING_THRESHOLD_F,
    FLOOD_THRESHOLD_IN,
    EXTREME_COLUMNS
)
from .trend_estimators import (
    TrendResult,
    OLS,
    MANN_KENDALL,
    STATUS_OK,
    STATUS_INSUFFICIENT_DATA,
    STATUS_DEGENERATE,
    STATUS_INVALID_INPUT,
    ols_trend,
    mann_kendall_trend,
    sens_slope,
    prepare_points
)
from .result_assembler import assemble_trend_results, results_to_frame, DEFAULT_ESTIMATORS

__all__ = [
    'ExtremeEventDetector',
    'FREEZING_THRESHOLD_F',
    'FLOOD_THRESHOLD_IN',
    'EXTREME_COLUMNS',
    'TrendResult',
    'OLS',
    'MANN_KENDALL',
    'STATUS_OK',
    'STATUS_INSUFFICIENT_DATA',
    'STATUS_DEGENERATE',
    'STATUS_INVALID_INPUT',
    'ols_trend',
    'mann_kendall_trend',
    'sens_slope',
    'prepare_points',
    'assemble_trend_results',
    'results_to_frame',
    'DEFAULT_ESTIMATORS'
]
