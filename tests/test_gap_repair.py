import pytest
import pandas as pd
import numpy as np
import os
import sys

# Add project root to path for testing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from data_processing.processors.gap_repair import GapRepairProcessor


def _make_daily(n=5, start='2000-01-01', **overrides):
    """Clean daily table with simple, distinct values; overrides replace whole columns."""
    data = pd.DataFrame({
        'date': pd.date_range(start, periods=n, freq='D'),
        'tmax': np.linspace(40.0, 40.0 + n - 1, n),
        'tmin': np.linspace(20.0, 20.0 + n - 1, n),
        'precipitation': np.full(n, 0.1),
        'snowfall': np.full(n, 0.5),
    })
    for column, values in overrides.items():
        data[column] = np.asarray(values, dtype=float)
    return data


class TestGapRepairProcessor:
    """Test deterministic gap filling."""

    @pytest.fixture
    def processor(self):
        return GapRepairProcessor({})

    def test_neighbour_mean_fills_single_gap(self, processor):
        """A gap with both neighbours present becomes their exact mean."""
        daily = _make_daily(tmax=[30.0, np.nan, 41.0, 42.0, 43.0],
                            tmin=[10.0, 11.0, 12.0, np.nan, 15.0])

        cleaned = processor.repair(daily)

        assert len(cleaned) == 5
        assert cleaned.loc[1, 'tmax'] == 35.5
        assert cleaned.loc[3, 'tmin'] == 13.5
        assert not cleaned.isna().any().any()

    def test_neighbour_mean_takes_precedence_for_snowfall(self, processor):
        daily = _make_daily(n=3, snowfall=[1.0, np.nan, 3.0])

        cleaned = processor.repair(daily)

        assert cleaned['snowfall'].tolist() == [1.0, 2.0, 3.0]

    def test_trailing_snowfall_block_zero_filled(self, processor):
        """Missing snowfall without two neighbours becomes 0.0 and the record survives."""
        daily = _make_daily(snowfall=[0.5, 1.0, np.nan, np.nan, np.nan])

        cleaned, report = processor.repair_with_report(daily)

        assert len(cleaned) == 5
        assert cleaned['snowfall'].tolist() == [0.5, 1.0, 0.0, 0.0, 0.0]
        assert report['n_snowfall_zero_filled'] == 3
        assert report['n_dropped'] == 0

    def test_consecutive_gaps_dropped(self, processor):
        """Two adjacent gaps cannot use each other as neighbours."""
        daily = _make_daily(tmax=[50.0, np.nan, np.nan, 53.0, 54.0])

        cleaned, report = processor.repair_with_report(daily)

        assert len(cleaned) == 3
        assert report['n_dropped'] == 2
        assert list(cleaned['date'].dt.day) == [1, 4, 5]

    def test_boundary_records_dropped(self, processor):
        """First and last records only have one neighbour."""
        daily = _make_daily(tmax=[np.nan, 41.0, 42.0, 43.0, 44.0],
                            precipitation=[0.1, 0.2, 0.3, 0.4, np.nan])

        cleaned, report = processor.repair_with_report(daily)

        assert report['n_dropped'] == 2
        assert list(cleaned['date'].dt.day) == [2, 3, 4]

    def test_dropped_record_does_not_partially_survive(self, processor):
        daily = _make_daily(tmax=[40.0, np.nan, np.nan, 43.0, 44.0],
                            tmin=[20.0, np.nan, 22.0, 23.0, 24.0])

        cleaned = processor.repair(daily)

        assert pd.Timestamp('2000-01-02') not in set(cleaned['date'])
        assert not cleaned.isna().any().any()

    def test_idempotent_on_clean_series(self, processor):
        clean = _make_daily(n=10)

        once = processor.repair(clean)
        twice = processor.repair(once)

        pd.testing.assert_frame_equal(once, clean)
        pd.testing.assert_frame_equal(twice, once)

    def test_input_not_modified(self, processor):
        daily = _make_daily(tmax=[30.0, np.nan, 41.0, 42.0, 43.0])
        original = daily.copy()

        processor.repair(daily)

        pd.testing.assert_frame_equal(daily, original)

    def test_unsorted_input_sorted_before_neighbour_lookup(self, processor):
        daily = _make_daily(tmax=[30.0, np.nan, 40.0, 41.0, 42.0])
        shuffled = daily.iloc[[3, 0, 4, 1, 2]]

        cleaned = processor.repair(shuffled)

        assert cleaned['date'].is_monotonic_increasing
        assert cleaned.loc[1, 'tmax'] == 35.0

    def test_report_counts(self, processor):
        daily = _make_daily(tmax=[30.0, np.nan, 40.0, 41.0, 42.0],
                            snowfall=[np.nan, 1.0, 1.0, 1.0, 1.0],
                            tmin=[20.0, 21.0, 22.0, 23.0, np.nan])

        _, report = processor.repair_with_report(daily)

        assert report['n_input'] == 5
        assert report['n_interpolated']['tmax'] == 1
        assert report['n_interpolated']['tmin'] == 0
        assert report['n_snowfall_zero_filled'] == 1
        assert report['n_dropped'] == 1
        assert report['n_output'] == 4

    def test_empty_input(self, processor):
        empty = _make_daily(n=0)

        cleaned, report = processor.repair_with_report(empty)

        assert cleaned.empty
        assert list(cleaned.columns) == ['date', 'tmax', 'tmin', 'precipitation', 'snowfall']
        assert report['n_output'] == 0

    def test_everything_dropped_returns_empty(self, processor):
        daily = _make_daily(n=3, tmax=[np.nan, np.nan, np.nan])

        cleaned, report = processor.repair_with_report(daily)

        assert cleaned.empty
        assert report['n_dropped'] == 3

    def test_calendar_date_values(self, processor):
        """Plain datetime.date values are accepted, even when records are dropped."""
        daily = _make_daily(tmax=[np.nan, 41.0, np.nan, 43.0, 44.0])
        daily['date'] = [d.date() for d in daily['date']]

        cleaned, report = processor.repair_with_report(daily)

        assert report['n_dropped'] == 1
        assert pd.api.types.is_datetime64_any_dtype(cleaned['date'])
        assert list(cleaned['date'].dt.day) == [2, 3, 4, 5]
        assert cleaned.loc[1, 'tmax'] == 42.0

    def test_output_shape_is_normalized(self, processor):
        daily = _make_daily()
        daily['station'] = 'USW00014837'
        shuffled = daily[['snowfall', 'station', 'tmin', 'date', 'precipitation', 'tmax']].iloc[[4, 2, 0, 3, 1]]
        shuffled.index = [10, 11, 12, 13, 14]

        cleaned = processor.repair(shuffled)

        assert list(cleaned.columns) == ['date', 'tmax', 'tmin', 'precipitation', 'snowfall', 'station']
        assert list(cleaned.index) == [0, 1, 2, 3, 4]
        pd.testing.assert_frame_equal(processor.repair(cleaned), cleaned)

    def test_zero_fill_can_be_disabled(self):
        processor = GapRepairProcessor({'analysis': {'gap_repair': {'zero_fill_snowfall': False}}})
        daily = _make_daily(snowfall=[0.5, 1.0, np.nan, np.nan, np.nan])

        cleaned = processor.repair(daily)

        assert len(cleaned) == 2
