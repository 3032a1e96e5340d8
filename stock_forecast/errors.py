# stock_forecast/errors.py
"""
Custom Exceptions for the Forecast Chart Pipeline
-------------------------------------------------

Every failure the pipeline can surface to its caller is one of these
types, so the presentation layer can report the first failure without
inspecting OS or library exceptions. Wrapped causes are chained with
``raise ... from exc``.
"""

from typing import Optional


class ForecastChartError(Exception):
    """
    Base exception for all forecast chart pipeline errors.
    """
    pass


class InsufficientDataError(ForecastChartError):
    """
    Raised when a series has too few observations to be forecast.
    """

    def __init__(self, count: int, required: int = 2):
        self.count = count
        self.required = required
        super().__init__(
            f"Not enough data points for predictions: got {count}, need at least {required}."
        )


class StagingError(ForecastChartError):
    """
    Raised when the predictor payload cannot be written out as a runnable file.
    """
    pass


class PredictorError(ForecastChartError):
    """
    Base exception for failures while running a predictor.
    """
    pass


class ProcessLaunchError(PredictorError):
    """
    Raised when the OS refuses to start the predictor process.
    """
    pass


class ProcessExecutionError(PredictorError):
    """
    Raised when the predictor process exits with a non-zero status.
    The captured standard error is kept for diagnostics.
    """

    def __init__(self, exit_status: int, stderr: str = ""):
        self.exit_status = exit_status
        self.stderr = stderr
        message = f"Predictor exited with status {exit_status}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class ProtocolError(PredictorError):
    """
    Raised when the predictor exits cleanly but its output is not an
    ordered array of numbers.
    """

    def __init__(self, raw_output: str, diagnostic: str):
        self.raw_output = raw_output
        self.diagnostic = diagnostic
        preview = raw_output if len(raw_output) <= 200 else raw_output[:200] + "..."
        super().__init__(f"Malformed predictor output ({diagnostic}): {preview!r}")


class PredictorTimeoutError(PredictorError, TimeoutError):
    """
    Raised when the predictor process does not finish before its deadline.
    The process is killed before this is raised.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Predictor did not finish within {timeout} seconds and was terminated.")


class PlottingError(ForecastChartError):
    """
    Raised when a chart cannot be rendered or written to its destination.
    """
    pass


class SourceFetchError(ForecastChartError):
    """
    Raised when the price history for a symbol cannot be retrieved or decoded.
    """

    def __init__(self, symbol: str, message: str = "", cause: Optional[BaseException] = None):
        self.symbol = symbol
        self.cause = cause
        self.message = message or f"Failed to fetch price history for '{symbol}'."
        super().__init__(self.message)
