from datetime import date
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from stock_forecast.data.yahoo_source import YahooSource
from stock_forecast.errors import SourceFetchError


def _history_frame():
    index = pd.DatetimeIndex(
        pd.to_datetime(["2024-01-02", "2024-01-03", "2024-01-04"]).tz_localize("America/New_York"),
        name="Date",
    )
    return pd.DataFrame({"Open": [1.0, 2.0, 3.0], "Close": [10.0, 11.0, 12.0]}, index=index)


@patch("stock_forecast.data.yahoo_source.yf.Ticker")
def test_fetch_success(mock_ticker):
    mock_ticker.return_value.history.return_value = _history_frame()

    series = YahooSource().fetch("MSFT", 3, today=date(2024, 4, 1))

    assert series.closes() == [10.0, 11.0, 12.0]
    assert series.points[0].date == date(2024, 1, 2)
    mock_ticker.assert_called_once_with("MSFT")
    mock_ticker.return_value.history.assert_called_once_with(start="2024-01-01", interval="1d")


@patch("stock_forecast.data.yahoo_source.yf.Ticker")
def test_empty_history_gives_empty_series(mock_ticker):
    mock_ticker.return_value.history.return_value = pd.DataFrame()
    assert len(YahooSource().fetch("MSFT", 3)) == 0


@patch("stock_forecast.data.yahoo_source.yf.Ticker")
def test_provider_failure_is_wrapped(mock_ticker):
    mock_ticker.return_value = MagicMock()
    mock_ticker.return_value.history.side_effect = RuntimeError("rate limited")
    with pytest.raises(SourceFetchError, match="rate limited"):
        YahooSource().fetch("MSFT", 3)
