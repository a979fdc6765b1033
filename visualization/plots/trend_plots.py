#!/usr/bin/env python3
"""
Trend plot implementations for yearly climate summaries.

Draws yearly series with their OLS fit line and a box summarizing both
estimators, plus a panel figure of the extreme-event counts.
"""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import logging
import os
from typing import Dict, Any, List, Optional

from analysis.core.trend_estimators import MANN_KENDALL, OLS, TrendResult
from .base import BasePlotter

logger = logging.getLogger(__name__)


def _significance_marker(p_value: float) -> str:
    if np.isnan(p_value):
        return ''
    if p_value < 0.001:
        return '***'
    if p_value < 0.01:
        return '**'
    if p_value < 0.05:
        return '*'
    return 'ns'


class TrendPlotter(BasePlotter):
    """Specialized plotter for yearly series and their trend results."""

    def _results_for(self, variable: str, trend_results: List[TrendResult]) -> Dict[str, TrendResult]:
        return {r.method: r for r in trend_results if r.variable == variable}

    def _draw_series(self, ax, series: pd.Series, variable: str,
                     results: Dict[str, TrendResult], ylabel: str = '') -> None:
        years = series.index.to_numpy(dtype=float)
        values = series.to_numpy(dtype=float)

        ax.plot(years, values, marker='o', linewidth=1.2, markersize=4,
                color=self.colors['observed'], label='Observed')

        ols = results.get(OLS)
        if ols is not None and ols.ok:
            fitted = ols.intercept + ols.slope_or_tau * years
            ax.plot(years, fitted, '--', linewidth=1.5, color=self.colors['ols_fit'],
                    label=f'OLS fit ({ols.slope_or_tau:+.3f}/yr)')

        lines = []
        for method, label in ((OLS, 'OLS slope'), (MANN_KENDALL, 'MK tau')):
            result = results.get(method)
            if result is None:
                continue
            if result.ok:
                lines.append(f'{label}: {result.slope_or_tau:+.3f} '
                             f'(p={result.p_value:.3f}{_significance_marker(result.p_value)})')
            else:
                lines.append(f'{label}: {result.status.replace("_", " ")}')

        if lines:
            significant = any(r.significant for r in results.values())
            ax.text(0.02, 0.97, '\n'.join(lines), transform=ax.transAxes, va='top', fontsize=8,
                    bbox=dict(boxstyle='round', facecolor='white',
                              edgecolor=self._significance_color(significant), alpha=0.85))

        ax.set_title(variable.replace('_', ' '))
        ax.set_xlabel('Year')
        if ylabel:
            ax.set_ylabel(ylabel)
        ax.grid(True, alpha=0.3)

    def create_trend_plot(self, series: pd.Series, variable: str,
                          trend_results: List[TrendResult],
                          ylabel: str = '',
                          output_path: Optional[str] = None) -> Optional[plt.Figure]:
        """Plot one yearly series with its OLS fit and both estimators' results."""
        series = series.dropna()
        if series.empty:
            logger.error(f"No data to plot for {variable}")
            return None

        fig, ax = plt.subplots(figsize=self.figure_size)
        self._draw_series(ax, series, variable, self._results_for(variable, trend_results), ylabel)
        ax.legend(loc='lower right', fontsize=8)
        fig.tight_layout()

        self._save_figure(fig, output_path)
        return fig

    def create_trend_dashboard(self, series_by_variable: Dict[str, pd.Series],
                               trend_results: List[TrendResult],
                               title: str = 'Climate Trends',
                               output_path: Optional[str] = None) -> Optional[plt.Figure]:
        """Grid of trend plots, one panel per variable."""
        variables = [v for v, s in series_by_variable.items() if not s.dropna().empty]
        if not variables:
            logger.error("No yearly series to plot")
            return None

        n_cols = min(3, len(variables))
        n_rows = int(np.ceil(len(variables) / n_cols))
        fig, axes = plt.subplots(n_rows, n_cols, figsize=(5 * n_cols, 3.5 * n_rows), squeeze=False)
        fig.suptitle(title, fontsize=14, fontweight='bold')

        for ax, variable in zip(axes.flat, variables):
            self._draw_series(ax, series_by_variable[variable].dropna(), variable,
                              self._results_for(variable, trend_results))

        for ax in list(axes.flat)[len(variables):]:
            ax.set_visible(False)

        fig.tight_layout()
        self._save_figure(fig, output_path)
        return fig

    def create_extremes_plot(self, extremes: pd.DataFrame,
                             output_path: Optional[str] = None) -> Optional[plt.Figure]:
        """Bar panels of freezing days and flood days, line of the hottest day."""
        if extremes.empty:
            logger.error("No extreme-event data to plot")
            return None

        fig, axes = plt.subplots(3, 1, figsize=(self.figure_size[0], self.figure_size[1] * 1.5),
                                 sharex=True)

        axes[0].bar(extremes['year'], extremes['freezing_days'], color='#5DADE2')
        axes[0].set_ylabel('Freezing days')
        axes[1].plot(extremes['year'], extremes['hottest_day'], marker='o', color='#E74C3C')
        axes[1].set_ylabel('Hottest day (°F)')
        axes[2].bar(extremes['year'], extremes['flood_days'], color='#1F618D')
        axes[2].set_ylabel('Flood days')
        axes[2].set_xlabel('Year')

        for ax in axes:
            ax.grid(True, alpha=0.3)

        fig.suptitle('Extreme Events per Year', fontsize=14, fontweight='bold')
        fig.tight_layout()
        self._save_figure(fig, output_path)
        return fig

    def generate_all(self, results: Dict[str, Any], series_by_variable: Dict[str, pd.Series],
                     output_dir: Optional[str] = None) -> Dict[str, str]:
        """Write the dashboard and extremes figures; returns name -> path."""
        output_dir = output_dir or self.plots_path
        written = {}

        dashboard_path = os.path.join(output_dir, 'trend_dashboard.png')
        fig = self.create_trend_dashboard(series_by_variable, results['trend_results'],
                                          output_path=dashboard_path)
        if fig is not None:
            written['trend_dashboard'] = dashboard_path
            plt.close(fig)

        extremes_path = os.path.join(output_dir, 'extreme_events.png')
        fig = self.create_extremes_plot(results['extremes'], output_path=extremes_path)
        if fig is not None:
            written['extreme_events'] = extremes_path
            plt.close(fig)

        return written
