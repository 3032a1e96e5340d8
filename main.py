"""
Central CLI entrypoint for the Stock Forecast Chart project.

Parses command-line arguments and dispatches them to the
ForecastChartCommand: render a forecast chart for a symbol, or run the
configured predictor on prices given on the command line.

Usage:
    python main.py <command> [--config CONFIG_PATH]

Supported commands:
    chart           Fetch history, forecast it and render a PNG chart
    predict         Run only the predictor on the given prices

Examples:
    python main.py chart AAPL --config configs/forecast_chart.yaml
    python main.py chart MSFT --months 6 --output charts/msft.png
    python main.py predict --config configs/forecast_chart.yaml 100 101 102.5
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import yaml

from stock_forecast.errors import ForecastChartError
from stock_forecast.pipeline import ForecastChartCommand
from stock_forecast.utils.config_loader import load_typed_config
from stock_forecast.utils.logger import configure_package_logging

# Handlers live on the package logger, configured once the config is loaded
logger = logging.getLogger("stock_forecast.cli")


def validate_config_path(config_path: Optional[str]) -> None:
    """
    Validates whether the given config path exists and is a file.
    A missing argument (None) means built-in defaults and is accepted.

    Args:
        config_path (str, optional): Path to the config file.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    if config_path is None:
        return
    if not os.path.isfile(config_path):
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stock Forecast Chart CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- Chart ---
    chart_parser = subparsers.add_parser("chart", help="Render a forecast chart for a symbol")
    chart_parser.add_argument("symbol", help="Stock symbol, e.g. AAPL")
    chart_parser.add_argument("--months", "-m", type=int, default=None, help="Months of history to fetch")
    chart_parser.add_argument("--output", "-o", default=None, help="Where to write the PNG chart")
    chart_parser.add_argument("--config", "-c", default=None, help="Path to config YAML")

    # --- Predict ---
    predict_parser = subparsers.add_parser("predict", help="Run the predictor on the given prices")
    predict_parser.add_argument("prices", nargs="+", type=float, help="Historical prices, oldest first")
    predict_parser.add_argument("--config", "-c", default=None, help="Path to config YAML")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI arguments and dispatch commands to the ForecastChartCommand.

    Returns:
        int: Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        validate_config_path(args.config)
        config = load_typed_config(args.config)
        configure_package_logging(level=config.logging.level, log_file=config.logging.file)
        command = ForecastChartCommand.from_config(config)

        if args.command == "chart":
            path = command.produce_forecast_chart(args.symbol, lookback_months=args.months, output_path=args.output)
            print(path)

        elif args.command == "predict":
            forecast = command.forecast(args.prices)
            print(json.dumps(forecast))

    except (ForecastChartError, ValueError, FileNotFoundError, KeyError, IndexError, yaml.YAMLError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Fatal error during execution: {e}")
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
