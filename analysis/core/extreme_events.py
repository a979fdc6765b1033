#!/usr/bin/env python3
"""
Extreme Event Detection Module

Per calendar year counts and extrema derived from fixed daily thresholds:
freezing days (tmax at or below FREEZING_THRESHOLD_F), the hottest day
(maximum tmax) and flood days (precipitation at or above FLOOD_THRESHOLD_IN).
"""

import logging
from typing import Any, Dict, Optional

import pandas as pd

from utils.data.validation import DATE_COLUMN

logger = logging.getLogger(__name__)

FREEZING_THRESHOLD_F = 32.0
FLOOD_THRESHOLD_IN = 2.0

EXTREME_COLUMNS = ['year', 'freezing_days', 'hottest_day', 'flood_days']


class ExtremeEventDetector:
    """Threshold-based extreme event metrics over a cleaned daily table."""

    def __init__(self, config: Dict[str, Any] = None,
                 freezing_threshold: Optional[float] = None,
                 flood_threshold: Optional[float] = None):
        self.config = config or {}
        extremes_config = self.config.get('analysis', {}).get('extremes', {})
        self.freezing_threshold = float(
            freezing_threshold if freezing_threshold is not None
            else extremes_config.get('freezing_threshold_f', FREEZING_THRESHOLD_F))
        self.flood_threshold = float(
            flood_threshold if flood_threshold is not None
            else extremes_config.get('flood_threshold_in', FLOOD_THRESHOLD_IN))

    def detect(self, cleaned: pd.DataFrame) -> pd.DataFrame:
        """Return one row per calendar year with freezing_days, hottest_day and flood_days."""
        if cleaned.empty:
            return pd.DataFrame({
                'year': pd.Series(dtype='int64'),
                'freezing_days': pd.Series(dtype='int64'),
                'hottest_day': pd.Series(dtype='float64'),
                'flood_days': pd.Series(dtype='int64'),
            })

        daily = pd.DataFrame({
            'year': pd.to_datetime(cleaned[DATE_COLUMN]).dt.year.to_numpy(),
            'freezing': (cleaned['tmax'] <= self.freezing_threshold).to_numpy(),
            'tmax': cleaned['tmax'].to_numpy(dtype=float),
            'flood': (cleaned['precipitation'] >= self.flood_threshold).to_numpy(),
        })

        summary = daily.groupby('year', sort=True).agg(
            freezing_days=('freezing', 'sum'),
            hottest_day=('tmax', 'max'),
            flood_days=('flood', 'sum'),
        ).reset_index()

        summary['year'] = summary['year'].astype('int64')
        summary['freezing_days'] = summary['freezing_days'].astype('int64')
        summary['flood_days'] = summary['flood_days'].astype('int64')

        logger.info(f"Extreme events over {len(summary)} years: "
                    f"{int(summary['freezing_days'].sum())} freezing days "
                    f"(tmax <= {self.freezing_threshold}°F), "
                    f"{int(summary['flood_days'].sum())} flood days "
                    f"(precipitation >= {self.flood_threshold} in)")

        return summary[EXTREME_COLUMNS]
