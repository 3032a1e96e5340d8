# stock_forecast/predictor/factory.py
import logging

from stock_forecast.predictor.base import Predictor
from stock_forecast.predictor.process_predictor import CommandPredictor, EmbeddedExecutablePredictor
from stock_forecast.predictor.staging import TemporaryExecutableManager
from stock_forecast.utils.config_loader import PredictorConfig

logger = logging.getLogger(__name__)


def build_predictor(config: PredictorConfig) -> Predictor:
    """
    Instantiate the predictor described by the ``predictor`` config section.

    Args:
        config (PredictorConfig): Predictor settings.

    Returns:
        Predictor: Ready-to-invoke predictor.
    """
    if config.kind == "command":
        logger.info(f"Using predictor command: {config.command}")
        return CommandPredictor(config.command)

    staging = TemporaryExecutableManager(staging_dir=config.staging_dir)
    return EmbeddedExecutablePredictor.from_file(config.executable_path, staging=staging)
