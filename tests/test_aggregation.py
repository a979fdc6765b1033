import pytest
import pandas as pd
import numpy as np
import os
import sys

# Add project root to path for testing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from data_processing.processors.temporal_aggregator import (
    TemporalAggregator, season_year, SUMMARY_COLUMNS
)


def _make_daily(start, end, seed=0):
    """Clean daily table with random but reproducible values."""
    dates = pd.date_range(start, end, freq='D')
    rng = np.random.default_rng(seed)
    return pd.DataFrame({
        'date': dates,
        'tmax': rng.uniform(20, 95, len(dates)),
        'tmin': rng.uniform(-10, 60, len(dates)),
        'precipitation': rng.exponential(0.1, len(dates)),
        'snowfall': np.where(dates.month.isin([11, 12, 1, 2, 3]), rng.exponential(0.5, len(dates)), 0.0),
    })


class TestSeasonYear:
    """Test the winter season-year mapping."""

    def test_december_moves_to_next_year(self):
        dates = pd.Series(pd.to_datetime(['1999-12-15', '2000-01-15', '2000-02-29', '2000-12-01']))
        assert season_year(dates).tolist() == [2000, 2000, 2000, 2001]

    def test_march_excluded_from_winter(self):
        daily = pd.DataFrame({
            'date': pd.to_datetime(['1999-12-15', '2000-01-15', '2000-03-01']),
            'tmax': [30.0, 20.0, 50.0],
            'tmin': [10.0, 0.0, 30.0],
            'precipitation': [0.1, 0.2, 0.4],
            'snowfall': [1.0, 2.0, 4.0],
        })

        winter = TemporalAggregator().winter(daily)

        assert winter['year'].tolist() == [2000]
        assert winter.loc[0, 'n_days'] == 2
        assert winter.loc[0, 'snow_total'] == pytest.approx(3.0)
        assert winter.loc[0, 'tmax_avg'] == pytest.approx(25.0)


class TestTemporalAggregator:
    """Test annual and seasonal aggregation."""

    @pytest.fixture
    def aggregator(self):
        return TemporalAggregator({})

    @pytest.fixture
    def daily(self):
        return _make_daily('2000-01-01', '2003-12-31', seed=42)

    def test_annual_mean_and_sum_rules(self, aggregator):
        daily = pd.DataFrame({
            'date': pd.to_datetime(['2000-06-01', '2000-06-02', '2001-06-01']),
            'tmax': [80.0, 90.0, 70.0],
            'tmin': [60.0, 64.0, 50.0],
            'precipitation': [0.5, 1.5, 0.25],
            'snowfall': [0.0, 0.0, 0.0],
        })

        annual = aggregator.annual(daily)

        assert list(annual.columns) == SUMMARY_COLUMNS
        assert annual['year'].tolist() == [2000, 2001]
        assert annual['tmax_avg'].tolist() == pytest.approx([85.0, 70.0])
        assert annual['tmin_avg'].tolist() == pytest.approx([62.0, 50.0])
        assert annual['precip_total'].tolist() == pytest.approx([2.0, 0.25])
        assert annual['n_days'].tolist() == [2, 1]

    def test_annual_one_row_per_year(self, aggregator, daily):
        annual = aggregator.annual(daily)

        assert annual['year'].tolist() == [2000, 2001, 2002, 2003]
        assert annual['n_days'].tolist() == [366, 365, 365, 365]

    def test_annual_snowfall_conservation(self, aggregator, daily):
        annual = aggregator.annual(daily)

        assert annual['snow_total'].sum() == pytest.approx(daily['snowfall'].sum())
        assert annual['precip_total'].sum() == pytest.approx(daily['precipitation'].sum())

    def test_winter_snowfall_conservation(self, aggregator, daily):
        """No winter day is counted twice or lost across the December shift."""
        winter = aggregator.winter(daily)
        winter_days = daily[daily['date'].dt.month.isin([12, 1, 2])]

        assert winter['snow_total'].sum() == pytest.approx(winter_days['snowfall'].sum())
        assert winter['n_days'].sum() == len(winter_days)

    def test_winter_boundary_years_are_partial(self, aggregator):
        daily = _make_daily('2000-01-01', '2001-12-31')

        winter = aggregator.winter(daily)

        # 2000: Jan + Feb 2000 (leap year); 2001: Dec 2000 + Jan + Feb 2001; 2002: Dec 2001 only
        assert winter['year'].tolist() == [2000, 2001, 2002]
        assert winter['n_days'].tolist() == [60, 90, 31]

    def test_winter_combines_december_with_following_year(self, aggregator, daily):
        winter = aggregator.winter(daily).set_index('year')

        expected = daily[
            ((daily['date'].dt.year == 2001) & (daily['date'].dt.month == 12))
            | ((daily['date'].dt.year == 2002) & daily['date'].dt.month.isin([1, 2]))
        ]

        assert winter.loc[2002, 'tmax_avg'] == pytest.approx(expected['tmax'].mean())
        assert winter.loc[2002, 'snow_total'] == pytest.approx(expected['snowfall'].sum())

    def test_other_seasons(self, aggregator, daily):
        summer = aggregator.season(daily, 'summer')

        assert summer['year'].tolist() == [2000, 2001, 2002, 2003]
        assert (summer['n_days'] == 92).all()
        assert (summer['snow_total'] == 0.0).all()

    def test_seasons_keyed_by_name(self, aggregator, daily):
        tables = aggregator.seasons(daily, ['winter', 'fall'])
        assert set(tables) == {'winter', 'fall'}

    def test_unknown_season(self, aggregator, daily):
        with pytest.raises(ValueError):
            aggregator.season(daily, 'monsoon')

    def test_empty_input(self, aggregator):
        empty = _make_daily('2000-01-02', '2000-01-01')

        annual = aggregator.annual(empty)
        winter = aggregator.winter(empty)

        assert annual.empty and winter.empty
        assert list(annual.columns) == SUMMARY_COLUMNS
        assert list(winter.columns) == SUMMARY_COLUMNS
