# stock_forecast/predictor/protocol.py
"""
Wire format shared with external predictor processes.

stdin  : {"prices": [<float>, ...]} followed by end-of-input
stdout : [<float>, ...] on success, exit status 0
stderr : free-form diagnostics; a non-zero exit status signals failure
"""

import json
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from stock_forecast.errors import InsufficientDataError, ProtocolError

MIN_OBSERVATIONS = 2

ForecastResponse = List[float]


@dataclass(frozen=True)
class ForecastRequest:
    """Closing prices in chronological order, handed to a predictor."""

    prices: Tuple[float, ...]

    def __post_init__(self) -> None:
        prices = tuple(float(p) for p in self.prices)
        bad = [p for p in prices if not math.isfinite(p)]
        if bad:
            raise ValueError(f"Forecast request contains non-finite prices: {bad[:5]}")
        object.__setattr__(self, "prices", prices)

    @classmethod
    def from_prices(cls, prices: Iterable[float]) -> "ForecastRequest":
        return cls(tuple(prices))

    def validate(self) -> None:
        """Raise InsufficientDataError when a predictor cannot be run on this request."""
        if len(self.prices) < MIN_OBSERVATIONS:
            raise InsufficientDataError(len(self.prices), MIN_OBSERVATIONS)


@dataclass(frozen=True)
class ProcessOutcome:
    """What a finished predictor process left behind."""

    exit_status: int
    stdout: str
    stderr: str


def encode_request(request: ForecastRequest) -> bytes:
    """Serialize a request as the single JSON object written to the predictor's stdin."""
    return json.dumps({"prices": list(request.prices)}).encode("utf-8")


def decode_response(raw_output: str) -> ForecastResponse:
    """
    Parse predictor stdout into an ordered list of floats.

    Args:
        raw_output (str): Everything the predictor wrote to stdout.

    Returns:
        ForecastResponse: Values in the order the predictor produced them.

    Raises:
        ProtocolError: If the output is not a JSON array of numbers.
    """
    try:
        payload = json.loads(raw_output)
    except json.JSONDecodeError as exc:
        raise ProtocolError(raw_output, f"invalid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise ProtocolError(raw_output, f"expected a JSON array, got {type(payload).__name__}")

    forecast: ForecastResponse = []
    for index, value in enumerate(payload):
        # bool is an int subclass but never a price
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ProtocolError(raw_output, f"element {index} is not a number: {value!r}")
        forecast.append(float(value))
    return forecast


def summarize(values: Sequence[float], limit: int = 5) -> str:
    """Short human-readable rendering of a long numeric sequence for log lines."""
    if len(values) <= 2 * limit:
        return "[" + ", ".join(f"{v:.4g}" for v in values) + "]"
    head = ", ".join(f"{v:.4g}" for v in values[:limit])
    tail = ", ".join(f"{v:.4g}" for v in values[-limit:])
    return f"[{head}, ... {tail}] ({len(values)} values)"
