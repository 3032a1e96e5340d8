"""Predictor interface and its process-based implementations."""

from .protocol import ForecastRequest, ForecastResponse, ProcessOutcome
from .base import Predictor, CallablePredictor
from .staging import StagedExecutable, TemporaryExecutableManager
from .process_predictor import CommandPredictor, EmbeddedExecutablePredictor
from .factory import build_predictor

__all__ = [
    "ForecastRequest",
    "ForecastResponse",
    "ProcessOutcome",
    "Predictor",
    "CallablePredictor",
    "StagedExecutable",
    "TemporaryExecutableManager",
    "CommandPredictor",
    "EmbeddedExecutablePredictor",
    "build_predictor",
]
