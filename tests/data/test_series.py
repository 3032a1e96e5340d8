from datetime import date

import pandas as pd
import pytest

from stock_forecast.data.series import PricePoint, PriceSeries


def test_points_are_immutable():
    point = PricePoint(date(2024, 1, 2), 100.0)
    with pytest.raises(AttributeError):
        point.close = 101.0


def test_closes_keep_order():
    series = PriceSeries("AAPL", [
        PricePoint(date(2024, 1, 2), 100.0),
        PricePoint(date(2024, 1, 3), 101.5),
        PricePoint(date(2024, 1, 4), 99.0),
    ])
    assert series.closes() == [100.0, 101.5, 99.0]
    assert len(series) == 3
    assert [p.date for p in series] == [date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)]


def test_empty_series_is_valid():
    series = PriceSeries("AAPL")
    assert len(series) == 0
    assert series.closes() == []
    assert "empty" in repr(series)


def test_out_of_order_points_rejected():
    with pytest.raises(ValueError, match="not chronological"):
        PriceSeries("AAPL", [PricePoint(date(2024, 1, 3), 1.0), PricePoint(date(2024, 1, 2), 2.0)])


def test_duplicate_dates_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        PriceSeries("AAPL", [PricePoint(date(2024, 1, 2), 1.0), PricePoint(date(2024, 1, 2), 2.0)])


def test_from_frame_sorts_and_deduplicates():
    df = pd.DataFrame({
        "date": ["2024-01-03T00:00:00Z", "2024-01-02T00:00:00Z", "2024-01-03T00:00:00Z"],
        "close": [3.0, 2.0, 3.5],
    })
    series = PriceSeries.from_frame("MSFT", df)
    assert series.closes() == [2.0, 3.5]
    assert series.points[0].date == date(2024, 1, 2)


def test_from_frame_missing_column():
    df = pd.DataFrame({"date": ["2024-01-02"], "open": [1.0]})
    with pytest.raises(KeyError):
        PriceSeries.from_frame("MSFT", df)


def test_from_empty_frame():
    assert len(PriceSeries.from_frame("MSFT", pd.DataFrame())) == 0


def test_from_frame_keeps_exchange_local_dates():
    """Stamps east of UTC must not slide back a day."""
    index = pd.to_datetime(["2024-03-04", "2024-03-05"]).tz_localize("Asia/Tokyo")
    df = pd.DataFrame({"Date": index, "Close": [1.0, 2.0]})

    series = PriceSeries.from_frame("7203.T", df, date_col="Date", close_col="Close")

    assert [p.date for p in series] == [date(2024, 3, 4), date(2024, 3, 5)]


def test_from_frame_mixed_offsets_fall_back_to_utc():
    df = pd.DataFrame({
        "date": ["2024-01-02T00:00:00+00:00", "2024-01-03T12:00:00+05:00"],
        "close": [1.0, 2.0],
    })
    series = PriceSeries.from_frame("MIX", df)
    assert [p.date for p in series] == [date(2024, 1, 2), date(2024, 1, 3)]


def test_from_frame_naive_dates():
    df = pd.DataFrame({"date": ["2024-01-02", "2024-01-03"], "close": [1.0, 2.0]})
    assert [p.date for p in PriceSeries.from_frame("X", df)] == [date(2024, 1, 2), date(2024, 1, 3)]
