# stock_forecast/data/base_source.py
import abc
import logging
from datetime import date
from typing import Optional

import pandas as pd

from stock_forecast.data.series import PriceSeries

logger = logging.getLogger(__name__)


class SeriesSource(abc.ABC):
    """
    Abstract base class for price history providers.
    Any failure while fetching must surface as SourceFetchError.
    """

    def __init__(self, source_name: str):
        """
        Args:
            source_name (str): Name of the data provider
        """
        self.source_name = source_name

    @abc.abstractmethod
    def fetch(self, symbol: str, lookback_months: int) -> PriceSeries:
        """
        Fetch daily closing prices for a symbol.

        Args:
            symbol (str): Ticker symbol.
            lookback_months (int): How many calendar months of history to fetch.

        Returns:
            PriceSeries: Chronological price history.
        """
        pass

    @staticmethod
    def start_date(lookback_months: int, today: Optional[date] = None) -> date:
        """
        First calendar day of the lookback window.

        Args:
            lookback_months (int): Months to look back, at least 1.
            today (date, optional): Reference day. Defaults to the current date.
        """
        if lookback_months < 1:
            raise ValueError(f"lookback_months must be >= 1, got {lookback_months}")
        today = today or date.today()
        return (pd.Timestamp(today) - pd.DateOffset(months=lookback_months)).date()

    def log_fetch(self, symbol: str, count: int) -> None:
        logger.info(f"{self.source_name}: Fetched {count} data points for symbol: {symbol}")
