# stock_forecast/predictor/process_predictor.py
"""
Predictors that run as child processes.

Each call is one synchronous round trip: the request is written to the
child's stdin, stdin is closed, and stdout/stderr are collected until the
process exits or the deadline passes (the child is then killed).
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from stock_forecast.errors import (
    ProcessExecutionError,
    ProcessLaunchError,
    PredictorTimeoutError,
)
from stock_forecast.predictor.base import Predictor
from stock_forecast.predictor.protocol import (
    ForecastRequest,
    ForecastResponse,
    ProcessOutcome,
    decode_response,
    encode_request,
    summarize,
)
from stock_forecast.predictor.staging import TemporaryExecutableManager

logger = logging.getLogger(__name__)


def run_predictor_process(argv: Sequence[str], request: ForecastRequest, timeout: Optional[float] = None) -> ProcessOutcome:
    """
    Spawn the predictor, feed it the request and wait for it to finish.

    Args:
        argv (Sequence[str]): Command line of the predictor.
        request (ForecastRequest): Request to write to stdin.
        timeout (float, optional): Seconds to wait before killing the child.

    Returns:
        ProcessOutcome: Exit status and decoded output streams.

    Raises:
        ProcessLaunchError: If the OS cannot start the process.
        PredictorTimeoutError: If the deadline passes.
    """
    argv = [str(arg) for arg in argv]
    logger.debug(f"Launching predictor: {argv}")
    try:
        # run() kills and reaps the child before re-raising TimeoutExpired
        completed = subprocess.run(
            argv,
            input=encode_request(request),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        logger.error(f"Predictor {argv[0]} timed out after {timeout}s")
        raise PredictorTimeoutError(timeout) from exc
    except OSError as exc:
        logger.error(f"Could not launch predictor {argv[0]}: {exc}")
        raise ProcessLaunchError(f"Could not launch predictor {argv[0]}: {exc}") from exc

    return ProcessOutcome(
        exit_status=completed.returncode,
        stdout=completed.stdout.decode("utf-8", errors="replace"),
        stderr=completed.stderr.decode("utf-8", errors="replace"),
    )


def interpret_outcome(outcome: ProcessOutcome) -> ForecastResponse:
    """
    Turn a finished process into a forecast or the matching error.

    Raises:
        ProcessExecutionError: On a non-zero exit status.
        ProtocolError: If stdout is not an array of numbers.
    """
    if outcome.exit_status != 0:
        logger.error(f"Error calling prediction: exit status {outcome.exit_status}, stderr: {outcome.stderr.strip()}")
        raise ProcessExecutionError(outcome.exit_status, outcome.stderr)

    if outcome.stderr.strip():
        logger.debug(f"Predictor stderr: {outcome.stderr.strip()}")

    forecast = decode_response(outcome.stdout)
    logger.info(f"Predictor returned {len(forecast)} values: {summarize(forecast)}")
    return forecast


class CommandPredictor(Predictor):
    """
    Runs an installed predictor command, e.g. ``["python", "arima_predict.py"]``.
    """

    def __init__(self, command: List[str]) -> None:
        if not command:
            raise ValueError("Predictor command must not be empty.")
        self.command = list(command)

    def _predict(self, request: ForecastRequest, timeout: Optional[float]) -> ForecastResponse:
        logger.info(f"Calling predictor command {self.command[0]} with {len(request.prices)} prices")
        outcome = run_predictor_process(self.command, request, timeout)
        return interpret_outcome(outcome)


class EmbeddedExecutablePredictor(Predictor):
    """
    Runs a predictor binary bundled with the application.

    The payload is staged to a fresh temporary executable on every call and
    removed before ``invoke`` returns or raises, so concurrent calls never
    share a file.

    Attributes:
        payload (bytes): The executable content.
        staging (TemporaryExecutableManager): Where and how the payload is staged.
    """

    def __init__(self, payload: bytes, staging: Optional[TemporaryExecutableManager] = None) -> None:
        if not payload:
            raise ValueError("Predictor payload is empty.")
        self.payload = payload
        self.staging = staging or TemporaryExecutableManager()

    @classmethod
    def from_file(cls, path: str, staging: Optional[TemporaryExecutableManager] = None) -> "EmbeddedExecutablePredictor":
        """
        Load the bundled payload from disk.

        Args:
            path (str): Location of the predictor binary asset.
            staging (TemporaryExecutableManager, optional): Staging settings.

        Raises:
            FileNotFoundError: If the asset does not exist.
        """
        asset = Path(path)
        if not asset.is_file():
            logger.error(f"Predictor asset not found: {path}")
            raise FileNotFoundError(f"Predictor asset not found: {path}")
        logger.info(f"Loaded predictor asset {asset} ({asset.stat().st_size} bytes)")
        return cls(asset.read_bytes(), staging=staging)

    def _predict(self, request: ForecastRequest, timeout: Optional[float]) -> ForecastResponse:
        with self.staging.staged(self.payload) as executable:
            logger.info(f"Calling embedded predictor with {len(request.prices)} prices")
            outcome = run_predictor_process([executable.path], request, timeout)
            return interpret_outcome(outcome)
