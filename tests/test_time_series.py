"""Tests for tsforecast.time_series module."""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

import numpy as np
import pandas as pd
import pytest

from tsforecast import (
    InvalidArgumentError,
    NotFoundError,
    NullReferenceError,
    TimePeriod,
    TimeSeries,
    TimeUnit,
)
from tsforecast.time_series import difference_values

ACVF = [4.889, -1.837, -0.407, 1.310, -1.917, 0.406]
ACF = [1.000, -0.376, -0.083, 0.268, -0.392, 0.083]


class TestTimeSeriesConstruction:
    """Tests for TimeSeries constructors and observation times."""

    def test_default_start_and_period(self):
        """Test that raw values get a synthetic monthly start in 1970."""
        series = TimeSeries([1.0, 2.0, 3.0])

        assert series.time_period == TimePeriod.one_month()
        assert series.start_time == pd.Timestamp("1970-01-01T00:00:00Z")
        assert series.observation_times[2] == pd.Timestamp("1970-03-01T00:00:00Z")

    def test_start_without_offset_is_utc(self):
        """Test that a local date-time string is taken to be in UTC."""
        series = TimeSeries([1.0, 2.0], TimePeriod.one_quarter(), "1956-01-01T00:00:00")

        assert series.start_time == pd.Timestamp("1956-01-01T00:00:00Z")
        assert series.start_time.utcoffset() == timedelta(0)

    def test_start_with_offset_keeps_offset(self):
        """Test that an explicit UTC offset is preserved."""
        series = TimeSeries([1.0, 2.0], TimeUnit.DAY, "2015-09-29T02:22:35-13:30")

        assert series.start_time.utcoffset() == -timedelta(hours=13, minutes=30)
        assert series.observation_times[1] == pd.Timestamp("2015-09-30T02:22:35-13:30")

    def test_datetime_start(self):
        """Test that a datetime start time is accepted."""
        start = datetime(2000, 1, 1, tzinfo=timezone.utc)
        series = TimeSeries([1.0, 2.0], TimeUnit.MONTH, start)

        assert series.start_time == pd.Timestamp("2000-01-01T00:00:00Z")

    def test_quarterly_observation_times(self, quarterly_series):
        """Test that each observation time is one period after the previous."""
        times = quarterly_series.observation_times

        assert times[1] == pd.Timestamp("1956-04-01T00:00:00Z")
        assert times[4] == pd.Timestamp("1957-01-01T00:00:00Z")
        assert len(times) == quarterly_series.size == 218

    def test_multi_unit_period(self):
        """Test a period made of several units."""
        series = TimeSeries([1.0, 2.0, 3.0], TimePeriod(TimeUnit.HOUR, 6), "2020-01-01")

        assert series.observation_times[2] == pd.Timestamp("2020-01-01T12:00:00Z")

    def test_values_are_copied(self):
        """Test that later changes to the input do not leak into the series."""
        data = np.array([1.0, 2.0, 3.0])
        series = TimeSeries(data)
        data[0] = 99.0

        assert series.at(0) == 1.0

    def test_values_are_read_only(self):
        """Test that the exposed values cannot be mutated."""
        series = TimeSeries([1.0, 2.0, 3.0])

        with pytest.raises(ValueError):
            series.values[0] = 5.0

        copy = series.to_numpy()
        copy[0] = 5.0
        assert series.at(0) == 1.0

    def test_empty_series(self):
        """Test that an empty series can be created."""
        series = TimeSeries([])

        assert series.size == 0
        assert len(series.observation_times) == 0
        assert np.isnan(series.mean)

    def test_two_dimensional_values_rejected(self):
        """Test that matrices are not accepted as values."""
        with pytest.raises(InvalidArgumentError):
            TimeSeries(np.ones((2, 2)))

    def test_none_values_rejected(self):
        """Test that None values raise NullReferenceError."""
        with pytest.raises(NullReferenceError):
            TimeSeries.from_observation_times(None, TimeUnit.DAY, [])

    def test_invalid_start_time(self):
        """Test that an unparseable start time raises."""
        with pytest.raises(InvalidArgumentError):
            TimeSeries([1.0], TimeUnit.DAY, "not a date")


class TestTimeSeriesFromObservationTimes:
    """Tests for TimeSeries.from_observation_times and from_frame."""

    def test_explicit_times(self):
        """Test that explicit times are used as given."""
        times = ["2020-01-01", "2020-01-08", "2020-01-15"]
        series = TimeSeries.from_observation_times([1.0, 2.0, 3.0], TimeUnit.WEEK, times)

        assert series.observation_times[1] == pd.Timestamp("2020-01-08T00:00:00Z")
        assert series.at("2020-01-15") == 3.0

    def test_length_mismatch(self):
        """Test that a different number of times and values raises."""
        with pytest.raises(InvalidArgumentError):
            TimeSeries.from_observation_times([1.0, 2.0], TimeUnit.DAY, ["2020-01-01"])

    def test_not_increasing(self):
        """Test that repeated or decreasing times raise."""
        with pytest.raises(InvalidArgumentError):
            TimeSeries.from_observation_times(
                [1.0, 2.0], TimeUnit.DAY, ["2020-01-02", "2020-01-01"]
            )
        with pytest.raises(InvalidArgumentError):
            TimeSeries.from_observation_times(
                [1.0, 2.0], TimeUnit.DAY, ["2020-01-01", "2020-01-01"]
            )

    def test_frame_round_trip(self, quarterly_series):
        """Test that to_frame and from_frame are inverses."""
        frame = quarterly_series.to_frame()

        assert list(frame.columns) == ["ds", "y"]
        assert TimeSeries.from_frame(frame, TimePeriod.one_quarter()) == quarterly_series

    def test_from_frame_sorts_by_date(self):
        """Test that from_frame sorts rows by observation time."""
        frame = pd.DataFrame(
            {"ds": pd.to_datetime(["2020-03-01", "2020-01-01", "2020-02-01"]), "y": [3, 1, 2]}
        )
        series = TimeSeries.from_frame(frame, TimeUnit.MONTH)

        assert series.tolist() == [1.0, 2.0, 3.0]


class TestTimeSeriesStatistics:
    """Tests for the eagerly computed summary statistics."""

    def test_mean(self):
        """Test the arithmetic mean."""
        series = TimeSeries([3.0, 7.0, 5.0], TimeUnit.MONTH, "2021-05-01")

        assert series.mean == 5.0

    def test_summary_statistics(self):
        """Test sum, sum of squares, variance, std and median."""
        series = TimeSeries([3.0, 7.0, 5.0])

        assert series.sum == 15.0
        assert series.sum_of_squares == 83.0
        assert series.variance == pytest.approx(8.0 / 3.0)
        assert series.std == pytest.approx(np.sqrt(8.0 / 3.0))
        assert series.median == 5.0

    def test_str_summary(self):
        """Test the human readable summary."""
        text = str(TimeSeries([3.0, 7.0, 5.0]))

        assert "number of observations: 3" in text
        assert "mean: 5.00" in text
        assert "period: 1 month" in text


class TestTimeSeriesLookup:
    """Tests for value lookup by position and by time."""

    def test_at_time_equals_at_index(self, quarterly_series):
        """Test that the first observation time maps to position 0."""
        assert quarterly_series.at("1956-01-01T00:00:00Z") == quarterly_series.at(0)
        assert quarterly_series.at(pd.Timestamp("1956-04-01", tz="UTC")) == quarterly_series.at(1)

    def test_iteration(self, acf_series):
        """Test that iterating yields the values as floats."""
        assert list(acf_series) == [10.0, 5.0, 4.5, 7.7, 3.4, 6.9]

    def test_getitem(self, acf_series):
        """Test indexing with square brackets."""
        assert acf_series[0] == 10.0
        assert acf_series[-1] == 6.9

    def test_unknown_time(self, quarterly_series):
        """Test that a time that is not an observation time raises."""
        with pytest.raises(NotFoundError):
            quarterly_series.at("1956-02-01T00:00:00Z")

    def test_not_found_is_key_error(self, quarterly_series):
        """Test that NotFoundError can be caught as KeyError."""
        with pytest.raises(KeyError):
            quarterly_series.at("1800-01-01")

    def test_index_out_of_range(self, acf_series):
        """Test that a position past the end raises IndexError."""
        with pytest.raises(IndexError):
            acf_series.at(6)

    def test_datetime_index(self, quarterly_series):
        """Test the read-only reverse lookup."""
        index = quarterly_series.datetime_index

        assert isinstance(index, Mapping)
        assert index[pd.Timestamp("1957-01-01T00:00:00Z")] == 4
        with pytest.raises(TypeError):
            index[pd.Timestamp("1800-01-01T00:00:00Z")] = 0


class TestAutoCovariance:
    """Tests for autocovariance and autocorrelation."""

    def test_auto_covariance_at_lag(self, acf_series):
        """Test autocovariances against known values."""
        for k, expected in enumerate(ACVF):
            assert acf_series.auto_covariance_at_lag(k) == pytest.approx(expected, abs=1e-2)

    def test_auto_correlation_at_lag(self, acf_series):
        """Test autocorrelations against known values."""
        for k, expected in enumerate(ACF):
            assert acf_series.auto_correlation_at_lag(k) == pytest.approx(expected, abs=1e-2)

    def test_auto_correlation_at_zero_is_one(self, quarterly_series, acf_series):
        """Test that the lag 0 autocorrelation is exactly one."""
        assert acf_series.auto_correlation_at_lag(0) == 1.0
        assert quarterly_series.auto_correlation_at_lag(0) == 1.0

    def test_auto_covariance_up_to_lag(self, acf_series):
        """Test that the result is capped at n values."""
        result = acf_series.auto_covariance_up_to_lag(9)

        assert len(result) == 6
        np.testing.assert_allclose(result, ACVF, atol=1e-2)

    def test_auto_correlation_up_to_lag(self, acf_series):
        """Test autocorrelations up to a lag below n."""
        np.testing.assert_allclose(acf_series.auto_correlation_up_to_lag(5), ACF, atol=1e-2)
        assert len(acf_series.auto_correlation_up_to_lag(2)) == 3

    def test_lag_beyond_length(self, acf_series):
        """Test that a lag of n or more has nothing to sum."""
        assert acf_series.auto_covariance_at_lag(6) == 0.0

    def test_negative_lag(self, quarterly_series):
        """Test that a negative lag raises."""
        with pytest.raises(InvalidArgumentError):
            quarterly_series.auto_covariance_at_lag(-1)
        with pytest.raises(InvalidArgumentError):
            quarterly_series.auto_correlation_up_to_lag(-1)

    def test_constant_series(self):
        """Test that a constant series has NaN autocorrelations."""
        series = TimeSeries([5.0, 5.0, 5.0, 5.0])

        assert series.auto_covariance_at_lag(0) == 0.0
        assert np.isnan(series.auto_correlation_at_lag(0))
        assert np.isnan(series.auto_correlation_at_lag(1))
        assert np.isnan(series.auto_correlation_up_to_lag(2)).all()
        assert len(series.auto_correlation_up_to_lag(2)) == 3

    def test_divides_by_n(self):
        """Test that the biased estimator divides by n, not n - k."""
        series = TimeSeries([1.0, 2.0, 3.0, 4.0])
        deviations = np.array([-1.5, -0.5, 0.5, 1.5])
        expected = float(np.dot(deviations[:3], deviations[1:])) / 4

        assert series.auto_covariance_at_lag(1) == pytest.approx(expected)


class TestBoxCox:
    """Tests for transform and back_transform."""

    def test_log_transform(self):
        """Test that lambda 0 is the natural logarithm."""
        series = TimeSeries([3.0, 7.0, np.e])

        np.testing.assert_allclose(
            series.transform(0).values, [np.log(3.0), np.log(7.0), 1.0], atol=1e-4
        )

    def test_log_back_transform(self):
        """Test that lambda 0 inverts with the exponential."""
        series = TimeSeries([np.log(3.0), np.log(7.0), 1.0])

        np.testing.assert_allclose(series.back_transform(0).values, [3.0, 7.0, np.e], atol=1e-4)

    def test_power_transform(self):
        """Test the power transform for a non-zero lambda."""
        series = TimeSeries([4.0, 9.0])

        np.testing.assert_allclose(series.transform(0.5).values, [2.0, 4.0])

    @pytest.mark.parametrize("box_cox_lambda", [-1.0, -0.5, 0.0, 0.5, 1.0, 2.0])
    def test_round_trip(self, elecsales, box_cox_lambda):
        """Test that back_transform undoes transform."""
        recovered = elecsales.transform(box_cox_lambda).back_transform(box_cox_lambda)

        np.testing.assert_allclose(recovered.values, elecsales.values, rtol=1e-8)
        assert recovered.observation_times == elecsales.observation_times

    @pytest.mark.parametrize("box_cox_lambda", [2.5, -1.5])
    def test_lambda_out_of_range(self, quarterly_series, box_cox_lambda):
        """Test that lambda outside [-1, 2] raises."""
        with pytest.raises(InvalidArgumentError):
            quarterly_series.transform(box_cox_lambda)
        with pytest.raises(InvalidArgumentError):
            quarterly_series.back_transform(box_cox_lambda)


class TestMovingAverage:
    """Tests for moving_average and centered_moving_average."""

    MA5 = [2381.53, 2424.556, 2463.758, 2552.598, 2627.7, 2750.622, 2858.348, 3014.704,
           3077.3, 3144.52, 3188.7, 3202.32, 3216.94, 3307.296, 3398.754, 3485.434]
    MA4 = [2380.39, 2388.3275, 2435.7675, 2500.0675, 2573.5, 2688.1025, 2795.91,
           2929.005, 3077.7, 3135.5, 3180.475, 3208.85, 3163.525, 3252.25, 3338.97,
           3443.0425, 3562.7425]
    CMA4 = [2384.35875, 2412.0475, 2467.9175, 2536.78375, 2630.80125, 2742.00625,
            2862.4575, 3003.3525, 3106.6, 3157.9875, 3194.6625, 3186.1875, 3207.8875,
            3295.61, 3391.00625, 3502.8925]

    def test_five_period_moving_average(self, elecsales):
        """Test an odd order moving average."""
        result = elecsales.moving_average(5)

        np.testing.assert_allclose(result.values, self.MA5, atol=1e-2)
        assert result.start_time == elecsales.observation_times[2]
        assert result.end_time == elecsales.observation_times[-3]

    def test_four_period_moving_average(self, elecsales):
        """Test an even order moving average."""
        result = elecsales.moving_average(4)

        np.testing.assert_allclose(result.values, self.MA4, atol=1e-2)
        assert result.start_time == elecsales.observation_times[1]
        assert result.end_time == elecsales.observation_times[-3]

    def test_four_period_centered_moving_average(self, elecsales):
        """Test the 2 x 4 centered moving average."""
        result = elecsales.centered_moving_average(4)

        np.testing.assert_allclose(result.values, self.CMA4, atol=1e-2)
        assert result.observation_times == elecsales.observation_times[2:-2]

    def test_five_period_centered_moving_average(self, elecsales):
        """Test that an odd order centered average is the plain one."""
        assert elecsales.centered_moving_average(5) == elecsales.moving_average(5)

    def test_order_one_is_identity(self, elecsales):
        """Test that a moving average of order one changes nothing."""
        assert elecsales.moving_average(1) == elecsales

    @pytest.mark.parametrize("m", [0, 21])
    def test_invalid_order(self, elecsales, m):
        """Test that an order outside [1, n] raises."""
        with pytest.raises(InvalidArgumentError):
            elecsales.moving_average(m)


class TestDifferencing:
    """Tests for difference and demean."""

    def test_difference_values(self):
        """Test first differences at lags 1 and 2."""
        series = TimeSeries([1.0, 4.0, 9.0, 16.0])

        assert series.difference().tolist() == [3.0, 5.0, 7.0]
        assert series.difference(2).tolist() == [8.0, 12.0]

    def test_difference_no_arg_is_lag_one(self, quarterly_series):
        """Test that the default lag is one."""
        assert quarterly_series.difference() == quarterly_series.difference(1)

    def test_difference_more_than_once(self, quarterly_series):
        """Test that differencing twice equals two single differences."""
        assert quarterly_series.difference(1, 2) == quarterly_series.difference().difference()

    def test_difference_three_times(self, elecsales):
        """Test that k passes equal k sequential applications."""
        expected = elecsales.difference().difference().difference()

        assert elecsales.difference(1, 3) == expected

    def test_difference_drops_first_times(self, quarterly_series):
        """Test that each pass drops the first lag observation times."""
        diffed = quarterly_series.difference(4, 2)

        assert diffed.size == 218 - 8
        assert diffed.start_time == quarterly_series.observation_times[8]

    def test_difference_zero_times(self, elecsales):
        """Test that zero passes returns an equivalent series."""
        assert elecsales.difference(1, 0) == elecsales

    def test_difference_invalid(self, elecsales):
        """Test invalid lags and repetition counts."""
        with pytest.raises(InvalidArgumentError):
            elecsales.difference(0)
        with pytest.raises(InvalidArgumentError):
            elecsales.difference(1, -1)
        with pytest.raises(InvalidArgumentError):
            elecsales.difference(21)

    def test_difference_values_function(self):
        """Test the array level helper."""
        np.testing.assert_array_equal(difference_values([1.0, 4.0, 9.0, 16.0], 1, 2), [2.0, 2.0])
        np.testing.assert_array_equal(difference_values([1.0, 2.0], 1, 0), [1.0, 2.0])

    def test_demean(self, elecsales):
        """Test that the demeaned series has zero mean."""
        demeaned = elecsales.demean()

        assert demeaned.mean == pytest.approx(0.0, abs=1e-9)
        assert demeaned.observation_times == elecsales.observation_times


class TestArithmetic:
    """Tests for element-wise arithmetic."""

    def test_minus(self):
        """Test element-wise subtraction."""
        series = TimeSeries([3.0, 5.0, 7.0])

        assert series.minus(TimeSeries([1.0, 1.0, 1.0])).tolist() == [2.0, 4.0, 6.0]
        assert series.minus([3.0, 5.0, 7.0]).tolist() == [0.0, 0.0, 0.0]

    def test_minus_empty_is_noop(self):
        """Test that subtracting an empty series returns the series itself."""
        series = TimeSeries([3.0, 5.0, 7.0])

        assert series.minus(TimeSeries([])) is series
        assert series.minus([]) is series

    def test_minus_length_mismatch(self):
        """Test that series of different lengths cannot be subtracted."""
        with pytest.raises(InvalidArgumentError):
            TimeSeries([3.0, 5.0, 7.0]).minus([1.0, 2.0])

    def test_plus_and_times(self):
        """Test element-wise addition and multiplication."""
        series = TimeSeries([1.0, 2.0, 3.0])

        assert series.plus([1.0, 1.0, 1.0]).tolist() == [2.0, 3.0, 4.0]
        assert series.times(series).tolist() == [1.0, 4.0, 9.0]
        with pytest.raises(InvalidArgumentError):
            series.plus([1.0])

    def test_covariance_and_correlation(self, elecsales):
        """Test that a series covaries with itself by its variance."""
        assert elecsales.covariance(elecsales) == pytest.approx(elecsales.variance)
        assert elecsales.correlation(elecsales) == pytest.approx(1.0)
        assert elecsales.correlation(elecsales.values * -2.0) == pytest.approx(-1.0)

    def test_correlation_with_constant(self):
        """Test that correlation with a constant series is NaN."""
        constant = TimeSeries([5.0, 5.0, 5.0, 5.0])

        assert np.isnan(constant.correlation([1.0, 2.0, 3.0, 4.0]))
        assert np.isnan(TimeSeries([1.0, 2.0, 3.0, 4.0]).correlation(constant))

    def test_original_is_unchanged(self, elecsales):
        """Test that transformations never mutate the original series."""
        before = elecsales.to_numpy()
        elecsales.minus(elecsales)
        elecsales.demean()
        elecsales.transform(0.5)

        np.testing.assert_array_equal(elecsales.values, before)


class TestSlicing:
    """Tests for slice and time_slice."""

    def test_slices_agree(self, quarterly_series):
        """Test that slicing by times, positions and 1-based positions agree."""
        expected = quarterly_series.time_slice(2, 5)

        assert quarterly_series.slice("1956-04-01T00:00:00Z", "1957-01-01T00:00:00Z") == expected
        assert quarterly_series.slice(1, 4) == expected
        assert expected.size == 4
        assert expected.at(0) == quarterly_series.at(1)

    def test_slice_unknown_time(self, quarterly_series):
        """Test that slicing from a time that is not observed raises."""
        with pytest.raises(NotFoundError):
            quarterly_series.slice("1956-02-01T00:00:00Z", "1957-01-01T00:00:00Z")

    @pytest.mark.parametrize("start,end", [(3, 1), (-1, 2), (0, 218)])
    def test_slice_out_of_range(self, quarterly_series, start, end):
        """Test that invalid position ranges raise."""
        with pytest.raises(InvalidArgumentError):
            quarterly_series.slice(start, end)


class TestAggregation:
    """Tests for aggregate and aggregate_to_years."""

    def test_monthly_to_quarterly(self):
        """Test that blocks of three months are summed."""
        series = TimeSeries(np.arange(1.0, 13.0), TimeUnit.MONTH, "2000-01-01")
        aggregated = series.aggregate(TimePeriod.one_quarter())

        assert aggregated.tolist() == [6.0, 15.0, 24.0, 33.0]
        assert aggregated.time_period == TimePeriod.one_quarter()
        assert aggregated.observation_times[1] == pd.Timestamp("2000-04-01T00:00:00Z")

    def test_aggregated_dates(self, quarterly_series):
        """Test that aggregated observation times start each block."""
        aggregated = quarterly_series.aggregate(TimeUnit.DECADE)

        assert aggregated.size == 5
        assert aggregated.start_time == pd.Timestamp("1956-01-01T00:00:00Z")
        assert aggregated.end_time == pd.Timestamp("1996-01-01T00:00:00Z")
        assert aggregated.at(0) == pytest.approx(quarterly_series.values[:40].sum())

    def test_aggregate_to_smaller_period(self, quarterly_series):
        """Test that aggregating quarterly data to months raises."""
        with pytest.raises(InvalidArgumentError):
            quarterly_series.aggregate(TimePeriod.one_month())

    def test_aggregate_to_years(self, weekly_series):
        """Test that aggregate_to_years matches aggregating to TimeUnit.YEAR."""
        assert weekly_series.aggregate_to_years() == weekly_series.aggregate(TimeUnit.YEAR)
        assert weekly_series.aggregate_to_years().size == 3


class TestEquality:
    """Tests for equality and hashing."""

    def test_hash_code_and_equals(self, quarterly_series, elecsales):
        """Test equality and hash consistency."""
        values = quarterly_series.to_numpy()
        series1 = TimeSeries(values, TimePeriod.one_quarter(), "1956-01-01T00:00:00")
        series2 = TimeSeries(values, TimePeriod.one_quarter(), "1957-04-01T00:00:00")
        series4 = TimeSeries(values, TimePeriod.one_quarter(), "1956-01-01T00:00:00")

        assert series1 == series1
        assert series1 == series4
        assert hash(series1) == hash(series4)
        assert series1 != None  # noqa: E711
        assert series1 != ""
        assert series1 != series2
        assert series2 != elecsales

    def test_differs_by_period(self):
        """Test that the period is part of equality."""
        assert TimeSeries([1.0, 2.0], TimeUnit.MONTH) != TimeSeries([1.0, 2.0], TimeUnit.DAY)

    def test_differs_by_value(self):
        """Test that a single different value breaks equality."""
        assert TimeSeries([1.0, 2.0, 3.0]) != TimeSeries([1.0, 2.0, 3.0000001])

    def test_differs_by_length(self):
        """Test that a longer series is not equal."""
        assert TimeSeries([1.0, 2.0]) != TimeSeries([1.0, 2.0, 3.0])

    def test_usable_as_dict_key(self):
        """Test that equal series collapse to one dictionary key."""
        cache = {TimeSeries([1.0, 2.0]): "a", TimeSeries([1.0, 2.0]): "b"}

        assert len(cache) == 1
