#!/usr/bin/env python3
"""
Gap Repair for Daily Climate Records

Fills missing daily values with a fixed precedence per field and record:

1. Both the preceding and the following record have the field: use the mean
   of the two neighbour values (read from the input, so a run of two or more
   consecutive gaps is never closed by this rule).
2. The field is snowfall: use 0.0. Unrecorded snowfall is assumed to mean no
   snow fell. This is a simplification, not a physical inference.
3. Any record still missing a value is dropped in full.

The first and last records only have one neighbour and so fall through to
rules 2 and 3.
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from utils.data.validation import DATE_COLUMN, NUMERIC_DAILY_COLUMNS, REQUIRED_DAILY_COLUMNS

logger = logging.getLogger(__name__)


class GapRepairProcessor:
    """Deterministic gap filling for a single-station daily table."""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}
        gap_config = self.config.get('analysis', {}).get('gap_repair', {})
        self.zero_fill_snowfall = gap_config.get('zero_fill_snowfall', True)

    def repair(self, data: pd.DataFrame) -> pd.DataFrame:
        """Return the cleaned daily table (see repair_with_report)."""
        cleaned, _ = self.repair_with_report(data)
        return cleaned

    def repair_with_report(self, data: pd.DataFrame) -> Tuple[pd.DataFrame, Dict[str, Any]]:
        """Fill gaps and drop unresolvable records.

        Args:
            data: Daily table sorted or unsorted by date, with unique dates

        Returns:
            Tuple of (cleaned table, audit report). The cleaned table is
            normalized: datetime64 dates sorted ascending, a fresh RangeIndex,
            and the standard columns first with any extra columns after them.
            The report holds n_input, n_interpolated (per field),
            n_snowfall_zero_filled, n_dropped and n_output.
        """
        repaired = data.copy()
        repaired[DATE_COLUMN] = pd.to_datetime(repaired[DATE_COLUMN])
        repaired = repaired.sort_values(DATE_COLUMN).reset_index(drop=True)

        report = {
            'n_input': len(repaired),
            'n_interpolated': {},
            'n_snowfall_zero_filled': 0,
            'n_dropped': 0,
            'n_output': 0
        }

        if repaired.empty:
            logger.warning("Gap repair received an empty daily table")
            return repaired[REQUIRED_DAILY_COLUMNS], report

        for column in NUMERIC_DAILY_COLUMNS:
            values = repaired[column].astype(float)
            neighbour_mean = self._neighbour_mean(values)
            fill_mask = values.isna() & neighbour_mean.notna()
            repaired[column] = values.where(~fill_mask, neighbour_mean)
            report['n_interpolated'][column] = int(fill_mask.sum())

        if self.zero_fill_snowfall:
            snow_missing = repaired['snowfall'].isna()
            report['n_snowfall_zero_filled'] = int(snow_missing.sum())
            repaired['snowfall'] = repaired['snowfall'].fillna(0.0)

        unresolved = repaired[NUMERIC_DAILY_COLUMNS].isna().any(axis=1)
        report['n_dropped'] = int(unresolved.sum())
        if report['n_dropped']:
            dropped_dates = repaired.loc[unresolved, DATE_COLUMN]
            logger.warning(f"Dropped {report['n_dropped']} records with unresolvable gaps "
                           f"({dropped_dates.min().date()} to {dropped_dates.max().date()})")

        cleaned = repaired[~unresolved].reset_index(drop=True)
        report['n_output'] = len(cleaned)

        logger.info(f"Gap repair: {report['n_input']} -> {report['n_output']} records, "
                    f"interpolated {sum(report['n_interpolated'].values())} values, "
                    f"zero-filled {report['n_snowfall_zero_filled']} snowfall values")

        return cleaned[REQUIRED_DAILY_COLUMNS + [c for c in cleaned.columns
                                                 if c not in REQUIRED_DAILY_COLUMNS]], report

    @staticmethod
    def _neighbour_mean(values: pd.Series) -> pd.Series:
        """Mean of the previous and next value; NaN unless both exist."""
        previous = values.shift(1)
        following = values.shift(-1)
        both = previous.notna() & following.notna()
        return ((previous + following) / 2.0).where(both, np.nan)
