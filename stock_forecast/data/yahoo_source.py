# stock_forecast/data/yahoo_source.py
import logging
from datetime import date
from typing import Optional

import yfinance as yf

from stock_forecast.data.base_source import SeriesSource
from stock_forecast.data.series import PriceSeries
from stock_forecast.errors import SourceFetchError

logger = logging.getLogger(__name__)


class YahooSource(SeriesSource):
    """
    Fetch daily closing prices from Yahoo Finance. Needs no credentials.
    """

    def __init__(self, interval: str = "1d"):
        super().__init__("Yahoo Finance")
        self.interval = interval

    def fetch(self, symbol: str, lookback_months: int, today: Optional[date] = None) -> PriceSeries:
        """
        Fetch history for the symbol starting at the lookback start date.

        Raises:
            SourceFetchError: If Yahoo Finance errors out or the frame cannot be decoded.
        """
        start = self.start_date(lookback_months, today)
        try:
            logger.info(f"Fetching Yahoo Finance data for {symbol} since {start}")
            hist = yf.Ticker(symbol).history(start=start.isoformat(), interval=self.interval)
        except Exception as e:
            logger.error(f"Error fetching Yahoo Finance data for {symbol}: {e}")
            raise SourceFetchError(symbol, f"Yahoo Finance request failed for {symbol}: {e}", e) from e

        if hist.empty:
            logger.warning(f"No historical data found for {symbol}")
            return PriceSeries(symbol)

        frame = hist.reset_index()
        date_col = "Date" if "Date" in frame.columns else frame.columns[0]
        try:
            series = PriceSeries.from_frame(symbol, frame, date_col=date_col, close_col="Close")
        except (KeyError, ValueError, TypeError) as exc:
            raise SourceFetchError(symbol, f"Could not decode Yahoo Finance prices for {symbol}: {exc}", exc) from exc

        self.log_fetch(symbol, len(series))
        return series
