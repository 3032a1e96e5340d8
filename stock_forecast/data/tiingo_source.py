# stock_forecast/data/tiingo_source.py
import logging
from datetime import date
from typing import Optional

import pandas as pd
import requests

from stock_forecast.data.base_source import SeriesSource
from stock_forecast.data.series import PriceSeries
from stock_forecast.errors import SourceFetchError

logger = logging.getLogger(__name__)


class TiingoSource(SeriesSource):
    """
    Fetch end-of-day prices from the Tiingo daily prices endpoint.

    Attributes:
        api_key (str): Tiingo API token.
        base_url (str): API root, without trailing slash.
        timeout (float): Per-request timeout in seconds.
    """

    PRICES_PATH = "/tiingo/daily/{symbol}/prices"

    def __init__(self, api_key: Optional[str], base_url: str = "https://api.tiingo.com", timeout: float = 30.0):
        """
        Initialize the source with API credentials.

        Args:
            api_key (str, optional): Tiingo API token. Fetching fails without one.
            base_url (str, optional): API root. Defaults to the public Tiingo host.
            timeout (float, optional): Request timeout in seconds.
        """
        super().__init__("Tiingo")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch(self, symbol: str, lookback_months: int, today: Optional[date] = None) -> PriceSeries:
        """
        Make a GET request for the symbol's daily prices since the lookback start.

        Args:
            symbol (str): Ticker symbol.
            lookback_months (int): Months of history.
            today (date, optional): Reference day for the lookback window.

        Returns:
            PriceSeries: Chronological closing prices.

        Raises:
            SourceFetchError: On missing credentials, network, HTTP or decoding failures.
        """
        if not self.api_key:
            raise SourceFetchError(symbol, "No Tiingo API key configured (set source.api_key or TIINGO_API_KEY).")

        url = self.base_url + self.PRICES_PATH.format(symbol=symbol)
        params = {
            "startDate": self.start_date(lookback_months, today).isoformat(),
            "token": self.api_key,
        }

        try:
            logger.info(f"Sending GET request to Tiingo for {symbol} since {params['startDate']}")
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()  # Raises HTTPError for bad responses (4xx or 5xx)
            json_data = response.json()
        except requests.exceptions.HTTPError as http_err:
            logger.error(f"HTTP error occurred: {http_err}")
            raise SourceFetchError(symbol, f"HTTP error fetching {symbol}: {http_err}", http_err) from http_err
        except requests.exceptions.RequestException as req_err:
            logger.error(f"Request exception: {req_err}")
            raise SourceFetchError(symbol, f"Request failed for {symbol}: {req_err}", req_err) from req_err
        except ValueError as decode_err:
            logger.error(f"Malformed JSON from Tiingo: {decode_err}")
            raise SourceFetchError(symbol, f"Malformed response for {symbol}: {decode_err}", decode_err) from decode_err

        if not isinstance(json_data, list):
            # Tiingo reports unknown tickers as an object with a "detail" message
            detail = json_data.get("detail") if isinstance(json_data, dict) else json_data
            raise SourceFetchError(symbol, f"Unexpected response for {symbol}: {detail}")

        try:
            series = PriceSeries.from_frame(symbol, pd.json_normalize(json_data))
        except (KeyError, ValueError, TypeError) as exc:
            logger.error(f"Could not decode Tiingo prices for {symbol}: {exc}")
            raise SourceFetchError(symbol, f"Could not decode prices for {symbol}: {exc}", exc) from exc

        self.log_fetch(symbol, len(series))
        return series
