"""
Data Processing Module

Handles daily record loading, gap repair and temporal aggregation
for single-station climate trend analysis.
"""

from .loaders.csv_loader import DailyClimateLoader, create_daily_loader, load_daily_records
from .processors.gap_repair import GapRepairProcessor
from .processors.temporal_aggregator import TemporalAggregator, season_year, SEASON_MONTHS, SUMMARY_COLUMNS

__all__ = [
    'DailyClimateLoader',
    'create_daily_loader',
    'load_daily_records',
    'GapRepairProcessor',
    'TemporalAggregator',
    'season_year',
    'SEASON_MONTHS',
    'SUMMARY_COLUMNS'
]
