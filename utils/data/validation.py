#!/usr/bin/env python3
"""
Input Validation Utilities for Station Climate Analysis

This module checks the daily input table at the engine boundary and the
shape of the trend results table. Structural defects (missing columns,
duplicate dates) raise DataQualityError; physically implausible values are
only counted and logged so the caller can decide what to do with them.
"""

import pandas as pd
import numpy as np
from typing import Dict, List, Any, Tuple, Sequence
import logging

from ..exceptions import DataQualityError

logger = logging.getLogger(__name__)

DATE_COLUMN = 'date'
NUMERIC_DAILY_COLUMNS = ['tmax', 'tmin', 'precipitation', 'snowfall']
REQUIRED_DAILY_COLUMNS = [DATE_COLUMN] + NUMERIC_DAILY_COLUMNS

DEFAULT_TEMPERATURE_RANGE_F = (-50.0, 110.0)


def validate_dataframe_structure(df: pd.DataFrame, required_columns: List[str],
                                 name: str = "DataFrame",
                                 allow_empty: bool = False) -> Tuple[bool, List[str]]:
    """
    Validate that a DataFrame has the required column structure.

    Args:
        df: DataFrame to validate
        required_columns: List of column names that must be present
        name: Name of the DataFrame for logging
        allow_empty: Accept a DataFrame with zero rows

    Returns:
        Tuple[bool, List[str]]: (is_valid, missing_columns)

    Example:
        >>> df = pd.DataFrame({'date': [], 'tmax': []})
        >>> validate_dataframe_structure(df, ['date', 'tmax', 'tmin'], allow_empty=True)
        (False, ['tmin'])
    """
    missing_columns = [col for col in required_columns if col not in df.columns]

    if missing_columns:
        logger.warning(f"{name} missing required columns: {missing_columns}")
        logger.debug(f"{name} has columns: {list(df.columns)}")
        return False, missing_columns

    if df.empty and not allow_empty:
        logger.warning(f"{name} is empty")
        return False, []

    logger.debug(f"{name} structure validation passed")
    return True, []


def validate_temperature_values(values: np.ndarray, name: str = "Temperature values",
                                valid_range: Sequence[float] = DEFAULT_TEMPERATURE_RANGE_F) -> Dict[str, Any]:
    """
    Count temperature values outside a plausible range (°F).

    NaN values are ignored. Values outside the range are reported, not removed.

    Returns:
        Dict with n_total, n_clean, n_invalid, valid and invalid_range
        (min/max of the offending values, or None).
    """
    values = np.asarray(values, dtype=float)
    clean_values = values[~np.isnan(values)]
    low, high = valid_range

    invalid_mask = (clean_values < low) | (clean_values > high)
    n_invalid = int(np.sum(invalid_mask))

    result = {
        'valid': n_invalid == 0,
        'n_total': len(values),
        'n_clean': len(clean_values),
        'n_invalid': n_invalid,
        'invalid_range': None
    }

    if n_invalid > 0:
        invalid_values = clean_values[invalid_mask]
        result['invalid_range'] = (float(np.min(invalid_values)), float(np.max(invalid_values)))
        logger.warning(f"{name}: {n_invalid}/{len(clean_values)} values outside plausible range "
                       f"[{low}, {high}] °F")

    return result


def validate_daily_records(data: pd.DataFrame,
                           temperature_range: Sequence[float] = DEFAULT_TEMPERATURE_RANGE_F,
                           name: str = "Daily records") -> Dict[str, Any]:
    """
    Validate a daily climate table at the engine input boundary.

    Args:
        data: Table with date, tmax, tmin, precipitation and snowfall columns
        temperature_range: Plausible (min, max) temperature in °F
        name: Description for logging

    Returns:
        Dict with plausibility counts:
        - n_records: number of rows
        - n_missing: missing values per numeric column
        - tmax / tmin: results of validate_temperature_values
        - n_negative_precipitation, n_negative_snowfall
        - valid: True if no plausibility problem was found

    Raises:
        DataQualityError: if required columns are missing, dates are not
            parseable, or a date occurs more than once.
    """
    is_valid, missing = validate_dataframe_structure(data, REQUIRED_DAILY_COLUMNS, name,
                                                     allow_empty=True)
    if not is_valid:
        raise DataQualityError(f"{name} missing required columns: {missing}")

    dates = data[DATE_COLUMN]
    if dates.isna().any():
        raise DataQualityError(f"{name} contains {int(dates.isna().sum())} rows without a date")

    duplicated = dates[dates.duplicated()]
    if not duplicated.empty:
        examples = [str(pd.Timestamp(d).date()) for d in duplicated.unique()[:5]]
        raise DataQualityError(f"{name} has {len(duplicated)} duplicate dates, e.g. {examples}")

    report = {
        'n_records': len(data),
        'n_missing': {col: int(data[col].isna().sum()) for col in NUMERIC_DAILY_COLUMNS},
        'tmax': validate_temperature_values(data['tmax'].to_numpy(dtype=float), f"{name} tmax",
                                            temperature_range),
        'tmin': validate_temperature_values(data['tmin'].to_numpy(dtype=float), f"{name} tmin",
                                            temperature_range),
        'n_negative_precipitation': int((data['precipitation'] < 0).sum()),
        'n_negative_snowfall': int((data['snowfall'] < 0).sum()),
    }

    for col in ('precipitation', 'snowfall'):
        n_negative = report[f'n_negative_{col}']
        if n_negative:
            logger.warning(f"{name}: {n_negative} negative {col} values")

    report['valid'] = (report['tmax']['valid'] and report['tmin']['valid']
                       and report['n_negative_precipitation'] == 0
                       and report['n_negative_snowfall'] == 0)

    logger.debug(f"{name}: validated {len(data)} records, missing values {report['n_missing']}")
    return report


def validate_trend_results(results_df: pd.DataFrame) -> Dict[str, Any]:
    """
    Check a trend results table for values outside their mathematical range.

    Example:
        >>> df = pd.DataFrame({'method': ['MannKendall'], 'slope_or_tau': [0.4], 'p_value': [0.01]})
        >>> validate_trend_results(df)['valid']
        True
    """
    checks = {}

    if 'p_value' in results_df.columns:
        p_values = results_df['p_value'].dropna()
        checks['p_value_range'] = {
            'valid': bool(((p_values >= 0.0) & (p_values <= 1.0)).all()),
            'values_outside_range': int(((p_values < 0.0) | (p_values > 1.0)).sum())
        }

    if {'method', 'slope_or_tau'} <= set(results_df.columns):
        tau = results_df.loc[results_df['method'] == 'MannKendall', 'slope_or_tau'].dropna()
        checks['tau_range'] = {
            'valid': bool(((tau >= -1.0) & (tau <= 1.0)).all()),
            'values_outside_range': int(((tau < -1.0) | (tau > 1.0)).sum())
        }

    all_valid = all(check['valid'] for check in checks.values())

    if all_valid:
        logger.debug(f"Trend results validation passed ({len(results_df)} rows)")
    else:
        failed_checks = [k for k, v in checks.items() if not v['valid']]
        logger.warning(f"Trend results validation failed: {failed_checks}")

    return {
        'valid': all_valid,
        'checks': checks,
        'n_rows': len(results_df)
    }
