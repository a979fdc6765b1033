#!/usr/bin/env python3
"""
Main script for Station Climate Trend Analysis

This script processes one station's daily climate record: it repairs gaps,
builds annual, winter and extreme-event summaries, and tests every yearly
variable for trends with OLS and Mann-Kendall.

Usage:
    python main.py --data data/station_daily.csv
    python main.py --data data/station_daily.csv --config my_config.yaml --output outputs/run1 --plots
"""

import argparse
import logging
import os
import sys

import pandas as pd

from utils.config.helpers import load_config, setup_logging
from utils.exceptions import ClimateAnalysisError
from climate_engine import ClimateTrendEngine


def format_trend_table(trends: pd.DataFrame) -> str:
    """Compact text rendering of the trend results table."""
    if trends.empty:
        return "No trend results"
    columns = ['variable', 'method', 'slope_or_tau', 'p_value', 'significant', 'direction', 'n_points']
    return trends[columns].to_string(index=False, float_format=lambda v: f"{v:.4f}")


def main(argv=None):
    """Main function to run the analysis."""
    parser = argparse.ArgumentParser(description='Station Climate Trend Analysis')
    parser.add_argument('--data', type=str, required=True,
                        help='Path to the daily station CSV')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (defaults to the packaged config)')
    parser.add_argument('--output', type=str, default=None,
                        help='Directory for exported tables (overrides config)')
    parser.add_argument('--plots', action='store_true',
                        help='Also render trend and extreme-event figures')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config)

        engine = ClimateTrendEngine(config)
        results = engine.run_file(args.data)
        written = engine.export_results(results, args.output)

        if args.plots:
            from visualization import TrendPlotter

            plots_dir = os.path.join(args.output, 'plots') if args.output else None
            plotter = TrendPlotter(config)
            written.update(plotter.generate_all(results, engine.yearly_series(
                {name: results[name] for name in ['annual'] + engine.seasons + ['extremes']}),
                output_dir=plots_dir))

        print(format_trend_table(results['trends']))
        print(f"\nDropped {results['gap_report']['n_dropped']} daily records during gap repair")
        print(f"Wrote {len(written)} files")

    except (ClimateAnalysisError, FileNotFoundError, ValueError) as e:
        logging.error(f"Analysis failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
