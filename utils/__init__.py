#!/usr/bin/env python3
"""
Utilities Module

This module provides common utilities for the climate trend framework,
including configuration management, data validation, and the error taxonomy.
"""

from .config.helpers import (
    load_config, setup_logging, ensure_directory_exists,
    validate_file_exists, save_results
)
from .data.validation import (
    validate_dataframe_structure,
    validate_daily_records,
    validate_trend_results
)
from .exceptions import (
    ClimateAnalysisError,
    DataQualityError,
    InsufficientDataError,
    DegenerateInputError
)

__all__ = [
    # Configuration helpers
    'load_config',
    'setup_logging',
    'ensure_directory_exists',
    'validate_file_exists',
    'save_results',

    # Data validation
    'validate_dataframe_structure',
    'validate_daily_records',
    'validate_trend_results',

    # Errors
    'ClimateAnalysisError',
    'DataQualityError',
    'InsufficientDataError',
    'DegenerateInputError'
]
