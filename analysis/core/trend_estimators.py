#!/usr/bin/env python3
"""
Trend Estimators

Two independent estimators over a yearly series:

- ols_trend: least-squares slope per year with a two-sided t-test p-value
  for slope = 0 (assumes a linear trend and normal residuals).
- mann_kendall_trend: Kendall's tau from the Mann-Kendall S statistic with a
  two-sided p-value from the tie-corrected normal approximation (no
  assumption on linearity or residual distribution). Sen's slope is reported
  alongside as the magnitude of the monotonic trend.

Running both on the same series and comparing their conclusions is the
intended use. Neither keeps state between calls.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import numpy as np
import pandas as pd
from scipy import stats

from utils.exceptions import DataQualityError, DegenerateInputError, InsufficientDataError

logger = logging.getLogger(__name__)

OLS = 'OLS'
MANN_KENDALL = 'MannKendall'

STATUS_OK = 'ok'
STATUS_INSUFFICIENT_DATA = 'insufficient_data'
STATUS_DEGENERATE = 'degenerate'
STATUS_INVALID_INPUT = 'invalid_input'

DEFAULT_ALPHA = 0.05
MIN_TREND_POINTS = 3

YearlyPoints = Union[pd.Series, pd.DataFrame, Iterable[Tuple[float, float]]]


@dataclass(frozen=True)
class TrendResult:
    """Outcome of one estimator applied to one variable.

    Attributes:
        variable: Name of the yearly series
        method: OLS or MannKendall
        slope_or_tau: OLS slope (units per year) or Kendall's tau
        p_value: Two-sided p-value
        significant: p_value < alpha
        n_points: Number of yearly points used
        status: ok, insufficient_data, degenerate or invalid_input
        message: Reason when status is not ok
        intercept: OLS intercept (OLS only)
        sen_slope: Sen's slope in units per year (MannKendall only)
    """

    variable: str
    method: str
    slope_or_tau: float
    p_value: float
    significant: bool
    n_points: int
    status: str = STATUS_OK
    message: str = ''
    intercept: Optional[float] = None
    sen_slope: Optional[float] = None

    @classmethod
    def failed(cls, variable: str, method: str, status: str, message: str,
               n_points: int = 0) -> 'TrendResult':
        """Result row for a computation that could not be carried out."""
        return cls(variable=variable, method=method, slope_or_tau=float('nan'),
                   p_value=float('nan'), significant=False, n_points=n_points,
                   status=status, message=message)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @property
    def direction(self) -> str:
        """increasing, decreasing, no trend, or the failure status."""
        if not self.ok:
            return self.status
        if not self.significant or self.slope_or_tau == 0:
            return 'no trend'
        return 'increasing' if self.slope_or_tau > 0 else 'decreasing'

    def to_dict(self) -> Dict[str, Any]:
        record = asdict(self)
        record['direction'] = self.direction
        return record


def prepare_points(points: YearlyPoints, min_points: int = MIN_TREND_POINTS) -> Tuple[np.ndarray, np.ndarray]:
    """Normalize a yearly series into sorted (years, values) arrays.

    Accepts a Series indexed by year, a two-column DataFrame (year, value)
    or an iterable of (year, value) pairs. NaN values are discarded.

    Raises:
        DataQualityError: if a year or value is not numeric, or a year
            occurs more than once
        InsufficientDataError: if fewer than min_points years remain
        DegenerateInputError: if all values are identical
    """
    try:
        years, values = _as_arrays(points)
    except (TypeError, ValueError) as e:
        raise DataQualityError(f"Trend input is not a numeric (year, value) series: {e}") from e

    valid = ~(np.isnan(years) | np.isnan(values))
    if not valid.all():
        logger.debug(f"Discarding {int((~valid).sum())} points with missing year or value")
    years, values = years[valid], values[valid]

    order = np.argsort(years, kind='mergesort')
    years, values = years[order], values[order]

    if len(years) > 1 and np.any(np.diff(years) == 0):
        duplicates = sorted(set(years[1:][np.diff(years) == 0].astype(int).tolist()))
        raise DataQualityError(f"Duplicate years in trend input: {duplicates}")

    required = max(MIN_TREND_POINTS, int(min_points))
    if len(years) < required:
        raise InsufficientDataError(f"{len(years)} yearly points supplied, at least {required} required")

    if np.unique(values).size == 1:
        raise DegenerateInputError(f"All {len(values)} values equal {values[0]}; trend is undefined")

    return years, values


def _as_arrays(points: YearlyPoints) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(points, pd.Series):
        return points.index.to_numpy(dtype=float), points.to_numpy(dtype=float)
    if isinstance(points, pd.DataFrame):
        if points.shape[1] != 2:
            raise ValueError(f"expected a (year, value) table, got columns {list(points.columns)}")
        return points.iloc[:, 0].to_numpy(dtype=float), points.iloc[:, 1].to_numpy(dtype=float)
    pairs = [(float(year), float(value)) for year, value in points]
    years = np.array([p[0] for p in pairs], dtype=float)
    values = np.array([p[1] for p in pairs], dtype=float)
    return years, values


def ols_trend(points: YearlyPoints, variable: str = 'value', alpha: float = DEFAULT_ALPHA,
              min_points: int = MIN_TREND_POINTS) -> TrendResult:
    """Fit value = a + b * year by least squares.

    Returns:
        TrendResult with slope b, the two-sided p-value of the t-test for
        b = 0, and the intercept a.
    """
    years, values = prepare_points(points, min_points)

    fit = stats.linregress(years, values)
    p_value = float(fit.pvalue)

    return TrendResult(
        variable=variable,
        method=OLS,
        slope_or_tau=float(fit.slope),
        p_value=p_value,
        significant=bool(p_value < alpha),
        n_points=len(years),
        intercept=float(fit.intercept),
    )


def mann_kendall_statistic(values: np.ndarray) -> Tuple[int, float]:
    """Mann-Kendall S and its tie-corrected null variance."""
    n = len(values)
    i, j = np.triu_indices(n, k=1)
    s = int(np.sign(values[j] - values[i]).sum())

    _, counts = np.unique(values, return_counts=True)
    tie_correction = np.sum(counts * (counts - 1) * (2 * counts + 5))
    var_s = (n * (n - 1) * (2 * n + 5) - tie_correction) / 18.0

    return s, float(var_s)


def sens_slope(years: np.ndarray, values: np.ndarray) -> float:
    """Median of all pairwise slopes."""
    i, j = np.triu_indices(len(values), k=1)
    slopes = (values[j] - values[i]) / (years[j] - years[i])
    return float(np.median(slopes))


def mann_kendall_trend(points: YearlyPoints, variable: str = 'value', alpha: float = DEFAULT_ALPHA,
                       min_points: int = MIN_TREND_POINTS) -> TrendResult:
    """Mann-Kendall monotonic trend test.

    tau = S / (n (n - 1) / 2). The standardized statistic uses a continuity
    correction, Z = (S - 1) / sqrt(Var(S)) for S > 0 and (S + 1) / sqrt(Var(S))
    for S < 0, and the p-value is two-sided under the normal distribution.
    """
    years, values = prepare_points(points, min_points)
    n = len(values)

    s, var_s = mann_kendall_statistic(values)

    if s > 0:
        z_score = (s - 1) / np.sqrt(var_s)
    elif s < 0:
        z_score = (s + 1) / np.sqrt(var_s)
    else:
        z_score = 0.0

    p_value = float(2 * stats.norm.sf(abs(z_score)))
    tau = s / (0.5 * n * (n - 1))

    logger.debug(f"Mann-Kendall {variable}: S={s}, Var(S)={var_s:.3f}, Z={z_score:.3f}")

    return TrendResult(
        variable=variable,
        method=MANN_KENDALL,
        slope_or_tau=float(tau),
        p_value=p_value,
        significant=bool(p_value < alpha),
        n_points=n,
        sen_slope=sens_slope(years, values),
    )
