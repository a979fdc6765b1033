#!/usr/bin/env python3
"""
Trend Result Assembly

Runs every estimator over every yearly series and collects one TrendResult
per (variable, method). Estimator failures become typed result rows so that
one defective series never prevents reporting on the others.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional

import pandas as pd

from utils.exceptions import DataQualityError, DegenerateInputError, InsufficientDataError
from .trend_estimators import (
    DEFAULT_ALPHA, MANN_KENDALL, MIN_TREND_POINTS, OLS,
    STATUS_DEGENERATE, STATUS_INSUFFICIENT_DATA, STATUS_INVALID_INPUT,
    TrendResult, YearlyPoints, mann_kendall_trend, ols_trend
)

logger = logging.getLogger(__name__)

Estimator = Callable[..., TrendResult]

DEFAULT_ESTIMATORS: Dict[str, Estimator] = {
    OLS: ols_trend,
    MANN_KENDALL: mann_kendall_trend,
}

RESULT_COLUMNS = ['variable', 'method', 'slope_or_tau', 'p_value', 'significant', 'direction',
                  'n_points', 'status', 'message', 'intercept', 'sen_slope']


def assemble_trend_results(series_by_variable: Mapping[str, YearlyPoints],
                           estimators: Optional[Mapping[str, Estimator]] = None,
                           alpha: float = DEFAULT_ALPHA,
                           min_points: int = MIN_TREND_POINTS) -> List[TrendResult]:
    """Apply each estimator to each variable.

    Args:
        series_by_variable: Variable name -> yearly points
        estimators: Method name -> estimator function; defaults to OLS and Mann-Kendall
        alpha: Significance level passed to every estimator
        min_points: Minimum yearly points passed to every estimator

    Returns:
        List of TrendResult ordered by variable, then by estimator.
    """
    estimators = estimators or DEFAULT_ESTIMATORS
    results = []

    for variable, points in series_by_variable.items():
        if not isinstance(points, (pd.Series, pd.DataFrame)):
            points = list(points)
        n_points = _count_points(points)
        for method, estimator in estimators.items():
            try:
                result = estimator(points, variable=variable, alpha=alpha, min_points=min_points)
            except InsufficientDataError as e:
                logger.warning(f"Skipping {method} for {variable}: insufficient data ({e})")
                result = TrendResult.failed(variable, method, STATUS_INSUFFICIENT_DATA, str(e), n_points)
            except DegenerateInputError as e:
                logger.warning(f"Skipping {method} for {variable}: degenerate input ({e})")
                result = TrendResult.failed(variable, method, STATUS_DEGENERATE, str(e), n_points)
            except DataQualityError as e:
                logger.warning(f"Skipping {method} for {variable}: invalid input ({e})")
                result = TrendResult.failed(variable, method, STATUS_INVALID_INPUT, str(e), n_points)
            results.append(result)

    n_significant = sum(1 for r in results if r.significant)
    n_failed = sum(1 for r in results if not r.ok)
    logger.info(f"Assembled {len(results)} trend results: {n_significant} significant, {n_failed} not computed")

    return results


def results_to_frame(results: List[TrendResult]) -> pd.DataFrame:
    """Tabulate trend results with one row per (variable, method)."""
    if not results:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in results])[RESULT_COLUMNS]


def _count_points(points: YearlyPoints) -> int:
    if isinstance(points, (pd.Series, pd.DataFrame)):
        return int(len(points.dropna()))
    return len(points)
