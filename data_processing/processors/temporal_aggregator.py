#!/usr/bin/env python3
"""
Temporal aggregation of cleaned daily records into yearly summaries.

Temperatures reduce by mean, precipitation and snowfall by sum. Annual tables
are keyed by calendar year; seasonal tables by season-year, where December
belongs to the following year's winter.
"""

import logging
from typing import Any, Dict, List

import pandas as pd

from utils.data.validation import DATE_COLUMN

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['year', 'tmax_avg', 'tmin_avg', 'precip_total', 'snow_total', 'n_days']

# Meteorological seasons
SEASON_MONTHS = {
    'spring': [3, 4, 5],
    'summer': [6, 7, 8],
    'fall': [9, 10, 11],
    'winter': [12, 1, 2]
}

_AGGREGATIONS = {
    'tmax_avg': ('tmax', 'mean'),
    'tmin_avg': ('tmin', 'mean'),
    'precip_total': ('precipitation', 'sum'),
    'snow_total': ('snowfall', 'sum'),
    'n_days': (DATE_COLUMN, 'count'),
}


def season_year(dates: pd.Series) -> pd.Series:
    """Winter season-year: December maps to the next year, other months keep theirs."""
    dates = pd.to_datetime(dates)
    return (dates.dt.year + (dates.dt.month == 12).astype(int)).rename('season_year')


class TemporalAggregator:
    """Reduce a cleaned daily table into annual and seasonal summaries."""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}

    def annual(self, cleaned: pd.DataFrame) -> pd.DataFrame:
        """One row per calendar year present in the table."""
        years = pd.to_datetime(cleaned[DATE_COLUMN]).dt.year
        summary = self._summarize(cleaned, years)
        logger.info(f"Annual aggregation: {len(summary)} years from {len(cleaned)} daily records")
        return summary

    def winter(self, cleaned: pd.DataFrame) -> pd.DataFrame:
        """One row per season-year of Dec (previous year), Jan and Feb.

        Boundary winters are kept even when incomplete; n_days shows how many
        daily records each one holds.
        """
        return self.season(cleaned, 'winter')

    def season(self, cleaned: pd.DataFrame, name: str) -> pd.DataFrame:
        """One row per year for a meteorological season (spring, summer, fall, winter)."""
        if name not in SEASON_MONTHS:
            raise ValueError(f"Unknown season: {name}. Supported seasons: {list(SEASON_MONTHS)}")

        dates = pd.to_datetime(cleaned[DATE_COLUMN])
        in_season = dates.dt.month.isin(SEASON_MONTHS[name])
        seasonal = cleaned[in_season]

        if name == 'winter':
            keys = season_year(seasonal[DATE_COLUMN])
        else:
            keys = pd.to_datetime(seasonal[DATE_COLUMN]).dt.year

        summary = self._summarize(seasonal, keys)

        incomplete = self._short_seasons(summary, name)
        if incomplete:
            logger.info(f"Partial {name} season-years kept: {incomplete}")

        logger.info(f"{name.capitalize()} aggregation: {len(summary)} season-years "
                    f"from {len(seasonal)} daily records")
        return summary

    def seasons(self, cleaned: pd.DataFrame, names: List[str]) -> Dict[str, pd.DataFrame]:
        """Aggregate several seasons at once, keyed by season name."""
        return {name: self.season(cleaned, name) for name in names}

    @staticmethod
    def _summarize(daily: pd.DataFrame, keys: pd.Series) -> pd.DataFrame:
        if daily.empty:
            return pd.DataFrame({col: pd.Series(dtype='int64' if col in ('year', 'n_days') else 'float64')
                                 for col in SUMMARY_COLUMNS})

        grouped = daily.groupby(keys.to_numpy(), sort=True)
        summary = grouped.agg(**_AGGREGATIONS)
        summary.index.name = 'year'
        summary = summary.reset_index()
        summary['year'] = summary['year'].astype('int64')
        return summary[SUMMARY_COLUMNS]

    @staticmethod
    def _short_seasons(summary: pd.DataFrame, name: str) -> List[int]:
        min_days = 28 * len(SEASON_MONTHS[name])
        return summary.loc[summary['n_days'] < min_days, 'year'].tolist()
