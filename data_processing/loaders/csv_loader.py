#!/usr/bin/env python3
"""
Daily station CSV loader.

Reads a single-station daily climate CSV (GHCN-Daily style column names or
the engine's own names) into the standard daily table: date, tmax, tmin,
precipitation, snowfall. Unparseable numeric cells become NaN and are left
for gap repair.
"""

import pandas as pd
import logging
from typing import Dict, Any

from utils.config.helpers import validate_file_exists
from utils.exceptions import DataQualityError
from utils.data.validation import DATE_COLUMN, NUMERIC_DAILY_COLUMNS, REQUIRED_DAILY_COLUMNS
from ..base_loader import StationDataLoader

logger = logging.getLogger(__name__)


# Lower-cased source column name -> standard column
COLUMN_ALIASES = {
    'date': 'date',
    'day': 'date',
    'tmax': 'tmax',
    'max_temp': 'tmax',
    'tmin': 'tmin',
    'min_temp': 'tmin',
    'prcp': 'precipitation',
    'precip': 'precipitation',
    'precipitation': 'precipitation',
    'snow': 'snowfall',
    'snowfall': 'snowfall',
}


class DailyClimateLoader(StationDataLoader):
    """Loader for daily climate CSV files of one station."""

    def load_data(self, file_path: str, **kwargs) -> pd.DataFrame:
        """Load, standardize and validate a daily CSV.

        Args:
            file_path: Path to the CSV file
            **kwargs: Passed through to pandas.read_csv

        Raises:
            FileNotFoundError: if the file does not exist
            DataQualityError: if required columns are missing or dates repeat
        """
        if not validate_file_exists(file_path):
            raise FileNotFoundError(f"Daily climate file not found: {file_path}")

        logger.info(f"Loading daily climate data from: {file_path}")
        raw = pd.read_csv(file_path, **kwargs)
        data = self.standardize_columns(raw)
        data = self.preprocess_data(data)
        self.validate_data(data)

        if data.empty:
            logger.warning(f"No daily records found in {file_path}")
        else:
            logger.info(f"Loaded {len(data):,} daily records "
                        f"({data[DATE_COLUMN].min().date()} to {data[DATE_COLUMN].max().date()})")

        self.data = data
        return data

    def standardize_columns(self, raw: pd.DataFrame) -> pd.DataFrame:
        """Rename known column aliases and keep the standard daily columns."""
        renamed = {}
        for col in raw.columns:
            standard = COLUMN_ALIASES.get(str(col).strip().lower())
            if standard and standard not in renamed.values():
                renamed[col] = standard

        data = raw.rename(columns=renamed)
        missing = [col for col in REQUIRED_DAILY_COLUMNS if col not in data.columns]
        if missing:
            raise DataQualityError(f"Daily climate file missing columns {missing}. "
                                   f"Available columns: {list(raw.columns)}")

        return data[REQUIRED_DAILY_COLUMNS].copy()

    def preprocess_data(self, data: pd.DataFrame) -> pd.DataFrame:
        """Parse dates, coerce numerics and sort by date."""
        data[DATE_COLUMN] = pd.to_datetime(data[DATE_COLUMN], errors='coerce')
        n_bad_dates = int(data[DATE_COLUMN].isna().sum())
        if n_bad_dates:
            logger.warning(f"Discarding {n_bad_dates} rows with unparseable dates")
            data = data.dropna(subset=[DATE_COLUMN]).copy()

        for col in NUMERIC_DAILY_COLUMNS:
            data[col] = pd.to_numeric(data[col], errors='coerce')

        return data.sort_values(DATE_COLUMN).reset_index(drop=True)


def create_daily_loader(config: Dict[str, Any]) -> DailyClimateLoader:
    """Factory for the daily station loader."""
    return DailyClimateLoader(config)


def load_daily_records(file_path: str, config: Dict[str, Any] = None) -> pd.DataFrame:
    """Convenience wrapper: load a daily CSV with a default loader."""
    return create_daily_loader(config or {}).load_data(file_path)
