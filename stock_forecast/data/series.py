# stock_forecast/data/series.py
"""
Immutable price history types.

A PriceSeries is strictly chronological with unique dates; it is built once
per forecast request and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, List, Tuple

import pandas as pd



def _calendar_dates(values: pd.Series) -> pd.Series:
    """
    Trading dates as the exchange saw them. Timezone-aware stamps keep their own
    zone; only columns mixing zones are normalised to UTC.
    """
    try:
        stamps = pd.to_datetime(values)
    except (ValueError, TypeError):
        stamps = pd.to_datetime(values, utc=True)
    if not pd.api.types.is_datetime64_any_dtype(stamps):
        stamps = pd.to_datetime(values, utc=True)
    return stamps.dt.date


@dataclass(frozen=True)
class PricePoint:
    """A single daily closing price."""

    date: date
    close: float


class PriceSeries:
    """
    Ordered, duplicate-free sequence of PricePoint objects.

    Attributes:
        symbol (str): Ticker the prices belong to.
        points (Tuple[PricePoint, ...]): Points in ascending date order.
    """

    def __init__(self, symbol: str, points: Iterable[PricePoint] = ()) -> None:
        points = tuple(points)
        for previous, current in zip(points, points[1:]):
            if current.date == previous.date:
                raise ValueError(f"Duplicate date in price series for {symbol}: {current.date}")
            if current.date < previous.date:
                raise ValueError(
                    f"Price series for {symbol} is not chronological: {previous.date} before {current.date}"
                )
        self.symbol = symbol
        self.points: Tuple[PricePoint, ...] = points

    @classmethod
    def from_frame(cls, symbol: str, df: pd.DataFrame, date_col: str = "date", close_col: str = "close") -> "PriceSeries":
        """
        Build a series from a DataFrame, sorting by date and keeping the last
        row for any repeated date.

        Args:
            symbol (str): Ticker symbol.
            df (pd.DataFrame): Frame holding at least the date and close columns.
            date_col (str): Name of the date column.
            close_col (str): Name of the closing price column.

        Returns:
            PriceSeries: The cleaned series.
        """
        if df.empty:
            return cls(symbol)

        missing = [col for col in (date_col, close_col) if col not in df.columns]
        if missing:
            raise KeyError(f"Price data for {symbol} is missing columns: {missing}")

        frame = pd.DataFrame({
            "date": _calendar_dates(df[date_col]),
            "close": pd.to_numeric(df[close_col], errors="raise").astype(float),
        })
        frame = frame.dropna()
        frame = frame.drop_duplicates(subset="date", keep="last").sort_values("date")
        return cls(symbol, (PricePoint(row.date, float(row.close)) for row in frame.itertuples(index=False)))

    def closes(self) -> List[float]:
        return [point.close for point in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    def __repr__(self) -> str:
        if not self.points:
            return f"PriceSeries({self.symbol!r}, empty)"
        return f"PriceSeries({self.symbol!r}, {len(self)} points, {self.points[0].date}..{self.points[-1].date})"
