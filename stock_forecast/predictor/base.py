# stock_forecast/predictor/base.py
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence
import logging
import numbers

from stock_forecast.errors import PredictorError, ProtocolError
from stock_forecast.predictor.protocol import ForecastRequest, ForecastResponse

logger = logging.getLogger(__name__)


class Predictor(ABC):
    """
    Abstract base class for anything that turns a price history into a forecast.
    The pipeline only ever talks to this interface, so an external process, an
    in-process model and a remote service are interchangeable.
    """

    def invoke(self, request: ForecastRequest, timeout: Optional[float] = None) -> ForecastResponse:
        """
        Validate the request, then run the predictor once.

        Args:
            request (ForecastRequest): Historical closing prices.
            timeout (float, optional): Deadline in seconds. None waits indefinitely.

        Returns:
            ForecastResponse: Forecast values, index 0 being the first step after
            the last historical price. May be empty.

        Raises:
            InsufficientDataError: If the request has fewer than two prices.
        """
        request.validate()
        return self._predict(request, timeout)

    @abstractmethod
    def _predict(self, request: ForecastRequest, timeout: Optional[float]) -> ForecastResponse:
        raise NotImplementedError("Subclasses must implement '_predict'")


class CallablePredictor(Predictor):
    """
    In-process predictor wrapping a plain function ``fn(prices) -> values``.
    The timeout is not enforced for in-process calls.
    """

    def __init__(self, fn: Callable[[Sequence[float]], Sequence[float]], name: Optional[str] = None) -> None:
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "callable")

    def _predict(self, request: ForecastRequest, timeout: Optional[float]) -> ForecastResponse:
        logger.info(f"Running in-process predictor '{self.name}' on {len(request.prices)} prices")
        try:
            values = self.fn(list(request.prices))
        except PredictorError:
            raise
        except Exception as exc:
            logger.error(f"In-process predictor '{self.name}' failed: {exc}")
            raise PredictorError(f"Predictor '{self.name}' failed: {exc}") from exc
        return _as_forecast(self.name, values)


def _as_forecast(name: str, values) -> ForecastResponse:
    """Apply the same numeric rules to in-process output as to process stdout."""
    try:
        items = list(values)
    except TypeError as exc:
        raise ProtocolError(repr(values), f"predictor '{name}' returned a non-sequence") from exc

    forecast: ForecastResponse = []
    for index, value in enumerate(items):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ProtocolError(repr(values), f"element {index} is not a number: {value!r}")
        forecast.append(float(value))
    return forecast
