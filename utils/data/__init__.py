"""
Data Validation Module

Boundary checks for the daily input table and the trend results table.
"""

from .validation import (
    DATE_COLUMN,
    NUMERIC_DAILY_COLUMNS,
    REQUIRED_DAILY_COLUMNS,
    DEFAULT_TEMPERATURE_RANGE_F,
    validate_dataframe_structure,
    validate_temperature_values,
    validate_daily_records,
    validate_trend_results
)

__all__ = [
    'DATE_COLUMN',
    'NUMERIC_DAILY_COLUMNS',
    'REQUIRED_DAILY_COLUMNS',
    'DEFAULT_TEMPERATURE_RANGE_F',
    'validate_dataframe_structure',
    'validate_temperature_values',
    'validate_daily_records',
    'validate_trend_results'
]
