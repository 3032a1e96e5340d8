"""Input sanitization for symbols and request parameters coming from the CLI or a UI."""

from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

SYMBOL_EXTRA_CHARS = {".", "-", "_", "^"}


class InputSanitizer:
    """Sanitize and clean user inputs before they reach a data source."""

    @staticmethod
    def sanitize_ticker(ticker: str, allowed_length: int = 10) -> Optional[str]:
        """Sanitize a ticker symbol.

        Args:
            ticker: Ticker symbol (e.g. 'AAPL', 'BRK.B', '^GSPC')
            allowed_length: Maximum allowed ticker length

        Returns:
            Sanitized ticker or None if invalid
        """
        if not ticker or not isinstance(ticker, str):
            logger.warning(f"Invalid ticker type: {type(ticker)}")
            return None

        ticker = ticker.strip().upper()

        if len(ticker) < 1:
            logger.warning("Ticker is empty")
            return None

        if not all((c.isascii() and c.isalnum()) or c in SYMBOL_EXTRA_CHARS for c in ticker):
            logger.warning(f"Ticker contains invalid characters: {ticker}")
            return None

        if len(ticker) > allowed_length:
            logger.warning(f"Ticker too long: {ticker} (max {allowed_length})")
            return None

        return ticker

    @staticmethod
    def sanitize_lookback(months: Union[int, float, str], min_months: int = 1, max_months: int = 600) -> Optional[int]:
        """Sanitize a lookback window given in months.

        Returns:
            Whole number of months or None if invalid
        """
        try:
            value = int(months)
        except (TypeError, ValueError):
            logger.warning(f"Invalid lookback: {months!r}")
            return None

        if value != float(months):
            logger.warning(f"Lookback must be a whole number of months: {months!r}")
            return None

        if not min_months <= value <= max_months:
            logger.warning(f"Lookback {value} outside range [{min_months}, {max_months}]")
            return None

        return value
