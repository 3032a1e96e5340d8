# stock_forecast/utils/config_loader.py

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "TIINGO_API_KEY"


# -------------------
# Pydantic Configs
# -------------------
class SourceConfig(BaseModel):
    provider: Literal["tiingo", "yahoo"] = "tiingo"
    api_key: Optional[str] = None
    base_url: str = "https://api.tiingo.com"
    lookback_months: int = Field(default=12, ge=1)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    def resolve_api_key(self) -> Optional[str]:
        """
        Return the configured API key, falling back to the TIINGO_API_KEY
        environment variable (a local .env file is honoured).
        """
        if self.api_key:
            return self.api_key
        load_dotenv()
        return os.getenv(API_KEY_ENV_VAR)


class PredictorConfig(BaseModel):
    kind: Literal["embedded", "command"] = "embedded"
    executable_path: str = "assets/arima_predict.exe"
    command: List[str] = Field(default_factory=list)
    timeout_seconds: Optional[float] = Field(default=60.0, gt=0)
    staging_dir: Optional[str] = None


class ChartConfig(BaseModel):
    window: int = Field(default=90, ge=1)
    output_dir: str = "charts"
    filename_template: str = "{symbol}_forecast.png"
    dpi: int = Field(default=100, ge=1)
    stock_color: str = "#ff0000"
    prediction_color: str = "#00ff00"

    @field_validator("filename_template")
    @classmethod
    def _template_takes_symbol(cls, value: str) -> str:
        try:
            rendered = value.format(symbol="SYMBOL")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"filename_template may only use the {{symbol}} field: {exc!r}") from exc
        if not rendered or Path(rendered).name != rendered:
            raise ValueError(f"filename_template must be a plain file name, got {value!r}")
        return value

    def output_path_for(self, symbol: str) -> Path:
        """Per-symbol chart location so concurrent requests never share a file."""
        return Path(self.output_dir) / self.filename_template.format(symbol=symbol)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None


class AppConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    predictor: PredictorConfig = Field(default_factory=PredictorConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# -------------------
# Functions
# -------------------
def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read the raw YAML mapping behind an AppConfig.

    Args:
        config_path (str | Path): Path to the YAML config file.

    Returns:
        Dict[str, Any]: Section name to settings. An empty file gives an empty dict.

    Raises:
        FileNotFoundError: If config file does not exist.
        yaml.YAMLError: If YAML parsing fails.
        ValueError: If the document is not a mapping of sections.
    """
    path = Path(config_path)
    if not path.is_file():
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML config file {config_path}: {e}")
        raise

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Top level of {config_path} must be a mapping of sections, got {type(raw).__name__}")

    logger.info(f"Loaded config sections {list(raw)} from {config_path}")
    return raw


def load_typed_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load and validate the full config as a typed Pydantic model.

    Args:
        config_path (str, optional): Path to main YAML config file. When None,
            every section takes its defaults.

    Returns:
        AppConfig: Typed configuration object.
    """
    if config_path is None:
        return AppConfig()
    raw_config = load_config(config_path)
    return AppConfig(**raw_config)
