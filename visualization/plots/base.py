#!/usr/bin/env python3
"""
Base plotting functionality for climate trend visualizations.

This module contains the BasePlotter class with shared configuration,
styling, and helper methods used across all specialized plotters.
"""

import matplotlib.pyplot as plt
import seaborn as sns
import logging
import os
from typing import Dict, Any, Optional

from utils.config.helpers import ensure_directory_exists

logger = logging.getLogger(__name__)

sns.set_palette("husl")


class BasePlotter:
    """Base class for all specialized plotters with shared functionality."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize base plotter with configuration."""
        self.config = config or {}
        self.viz_config = self.config.get('visualization', {})

        self.colors = {
            'observed': '#2E86C1',
            'ols_fit': '#2C3E50',
            'significant': '#27AE60',
            'non_significant': '#F39C12',
        }
        self.colors.update(self.viz_config.get('colors', {}))

        self.figure_size = self.viz_config.get('figure_size', [10, 6])
        self.dpi = self.viz_config.get('dpi', 150)
        self.plots_path = self.config.get('output', {}).get('plots_path', 'outputs/plots')

        style = self.viz_config.get('style', 'default')
        try:
            plt.style.use(style)
        except (OSError, ValueError):
            logger.warning(f"Style '{style}' not available, using default")

    def _significance_color(self, significant: bool) -> str:
        return self.colors['significant'] if significant else self.colors['non_significant']

    def _save_figure(self, fig: plt.Figure, output_path: Optional[str]) -> None:
        """Save figure if an output path is given."""
        if not output_path:
            return
        directory = os.path.dirname(output_path)
        if directory:
            ensure_directory_exists(directory)
        fig.savefig(output_path, dpi=self.dpi, bbox_inches='tight')
        logger.info(f"Saved plot: {output_path}")
