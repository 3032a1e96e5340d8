"""Price history model and the sources that supply it."""

from .series import PricePoint, PriceSeries
from .base_source import SeriesSource
from .tiingo_source import TiingoSource
from .yahoo_source import YahooSource

__all__ = [
    "PricePoint",
    "PriceSeries",
    "SeriesSource",
    "TiingoSource",
    "YahooSource",
]
