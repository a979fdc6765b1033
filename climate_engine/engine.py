#!/usr/bin/env python3
"""
Station Climate Trend Engine

Runs the full batch pipeline over one station's daily record:

    daily table -> validation -> gap repair -> cleaned table
        -> annual and seasonal summaries, extreme-event summary
        -> OLS and Mann-Kendall per yearly variable -> trend results table

Every stage is a pure function of its input; the engine only wires them
together, reads thresholds and significance settings from the config, and
exports the resulting tables.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from utils.config.helpers import load_config, ensure_directory_exists, save_results
from utils.data.validation import validate_daily_records, validate_trend_results
from data_processing.loaders.csv_loader import DailyClimateLoader
from data_processing.processors.gap_repair import GapRepairProcessor
from data_processing.processors.temporal_aggregator import TemporalAggregator
from analysis.core.extreme_events import ExtremeEventDetector
from analysis.core.result_assembler import assemble_trend_results, results_to_frame
from analysis.core.trend_estimators import DEFAULT_ALPHA, MIN_TREND_POINTS

logger = logging.getLogger(__name__)

SUMMARY_VARIABLES = ['tmax_avg', 'tmin_avg', 'precip_total', 'snow_total']
EXTREME_VARIABLES = ['freezing_days', 'hottest_day', 'flood_days']


class ClimateTrendEngine:
    """Batch trend analysis engine for a single station."""

    def __init__(self, config: Optional[Union[str, Dict[str, Any]]] = None):
        """Initialize with a config dict, a YAML path, or the packaged defaults."""
        if config is None or isinstance(config, str):
            config = load_config(config)
        self.config = config

        analysis_config = self.config.get('analysis', {})
        trend_config = analysis_config.get('trends', {})
        self.alpha = float(trend_config.get('alpha', DEFAULT_ALPHA))
        self.min_points = int(trend_config.get('min_points', MIN_TREND_POINTS))
        self.seasons = self._season_names(analysis_config.get('seasons', ['winter']))
        self.temperature_range = tuple(
            self.config.get('validation', {}).get('temperature_range_f', (-50.0, 110.0)))

        self.loader = DailyClimateLoader(self.config)
        self.gap_repair = GapRepairProcessor(self.config)
        self.aggregator = TemporalAggregator(self.config)
        self.extreme_detector = ExtremeEventDetector(self.config)

    def load(self, file_path: str) -> pd.DataFrame:
        """Load a daily CSV through the station loader."""
        return self.loader.load_data(file_path)

    def run_file(self, file_path: str) -> Dict[str, Any]:
        """Load a daily CSV and run the full pipeline on it."""
        return self.run(self.load(file_path))

    def run(self, daily: pd.DataFrame) -> Dict[str, Any]:
        """Run the full pipeline.

        Returns:
            Dictionary with keys:
            - validation: plausibility report of the raw daily table
            - gap_report: gap repair audit counts
            - cleaned: cleaned daily table
            - annual, <season> (winter by default), extremes: yearly tables
            - trend_results: list of TrendResult
            - trends: trend results as a DataFrame
            - trend_validation: range checks on the trends table
        """
        logger.info(f"Starting climate trend analysis on {len(daily):,} daily records")

        validation = validate_daily_records(daily, temperature_range=self.temperature_range)
        cleaned, gap_report = self.gap_repair.repair_with_report(daily)

        tables = self.build_tables(cleaned)
        trend_results = assemble_trend_results(
            self.yearly_series(tables), alpha=self.alpha, min_points=self.min_points)
        trends = results_to_frame(trend_results)
        trend_validation = validate_trend_results(trends)

        results = {
            'validation': validation,
            'gap_report': gap_report,
            'cleaned': cleaned,
            'trend_results': trend_results,
            'trends': trends,
            'trend_validation': trend_validation,
        }
        results.update(tables)

        logger.info("Climate trend analysis completed")
        return results

    def build_tables(self, cleaned: pd.DataFrame) -> Dict[str, pd.DataFrame]:
        """Annual, seasonal and extreme-event tables keyed by table name."""
        tables = {'annual': self.aggregator.annual(cleaned)}
        tables.update(self.aggregator.seasons(cleaned, self.seasons))
        tables['extremes'] = self.extreme_detector.detect(cleaned)
        return tables

    @staticmethod
    def yearly_series(tables: Dict[str, pd.DataFrame]) -> Dict[str, pd.Series]:
        """Flatten yearly tables into '<table>_<column>' series indexed by year."""
        series = {}
        for table_name, table in tables.items():
            columns = EXTREME_VARIABLES if table_name == 'extremes' else SUMMARY_VARIABLES
            indexed = table.set_index('year')
            for column in columns:
                series[f'{table_name}_{column}'] = indexed[column].astype(float)
        return series

    def export_results(self, results: Dict[str, Any], output_dir: Optional[str] = None) -> Dict[str, str]:
        """Write the yearly tables and the trend table as CSV files.

        Returns:
            Mapping of table name to written file path.
        """
        output_dir = output_dir or self.config.get('output', {}).get('results_path', 'outputs/results')
        ensure_directory_exists(output_dir)

        written = {}
        for name in ['annual'] + self.seasons + ['extremes', 'trends', 'cleaned']:
            table = results.get(name)
            if table is None:
                continue
            path = os.path.join(output_dir, f'{name}.csv')
            save_results(table, path)
            written[name] = path

        logger.info(f"Exported {len(written)} tables to {output_dir}")
        return written

    @staticmethod
    def _season_names(configured: List[str]) -> List[str]:
        names = [str(name).lower() for name in (configured or [])]
        if 'winter' not in names:
            names.insert(0, 'winter')
        return names
