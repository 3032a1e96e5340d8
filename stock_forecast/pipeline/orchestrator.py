"""
orchestrator.py

Sequences one forecast chart request:

    fetch prices -> invoke predictor -> build chart -> render

The command object is constructed once with its collaborators and holds no
per-request state, so the presentation layer can call it repeatedly.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from stock_forecast.data import SeriesSource, TiingoSource, YahooSource
from stock_forecast.errors import ForecastChartError, InsufficientDataError
from stock_forecast.plotting import SeriesPlotBuilder
from stock_forecast.predictor import ForecastRequest, Predictor, build_predictor
from stock_forecast.predictor.protocol import ForecastResponse, MIN_OBSERVATIONS
from stock_forecast.utils.config_loader import AppConfig, SourceConfig
from stock_forecast.validation import InputSanitizer


def build_source(config: SourceConfig) -> SeriesSource:
    """
    Instantiate the price history provider named in the ``source`` config section.
    """
    if config.provider == "yahoo":
        return YahooSource()
    return TiingoSource(
        api_key=config.resolve_api_key(),
        base_url=config.base_url,
        timeout=config.request_timeout_seconds,
    )


class ForecastChartCommand:
    """
    Produces a forecast chart for a symbol.

    Attributes:
        source (SeriesSource): Price history provider.
        predictor (Predictor): Forecasting capability.
        plot_builder (SeriesPlotBuilder): Chart composer and renderer.
        config (AppConfig): Defaults for lookback, deadline and output location.
        logger: Logger instance.
    """

    def __init__(
        self,
        source: SeriesSource,
        predictor: Predictor,
        plot_builder: SeriesPlotBuilder,
        config: Optional[AppConfig] = None,
    ) -> None:
        self.source = source
        self.predictor = predictor
        self.plot_builder = plot_builder
        self.config = config or AppConfig()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: AppConfig) -> "ForecastChartCommand":
        """
        Wire up source, predictor and plot builder from a typed configuration.
        """
        plot_builder = SeriesPlotBuilder(
            window=config.chart.window,
            dpi=config.chart.dpi,
            stock_color=config.chart.stock_color,
            prediction_color=config.chart.prediction_color,
        )
        return cls(
            source=build_source(config.source),
            predictor=build_predictor(config.predictor),
            plot_builder=plot_builder,
            config=config,
        )

    def forecast(self, prices) -> ForecastResponse:
        """
        Run only the predictor on a list of prices, using the configured deadline.
        """
        request = ForecastRequest.from_prices(prices)
        return self.predictor.invoke(request, timeout=self.config.predictor.timeout_seconds)

    def produce_forecast_chart(
        self,
        symbol: str,
        lookback_months: Optional[int] = None,
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Fetch, forecast and render a chart for one symbol.

        Args:
            symbol (str): Ticker symbol as typed by the user.
            lookback_months (int, optional): History to fetch. Defaults to config.
            output_path (str | Path, optional): Chart destination. Defaults to the
                per-symbol path from the ``chart`` config section.

        Returns:
            Path: Location of the freshly rendered chart.

        Raises:
            ValueError: If the symbol or lookback is invalid.
            ForecastChartError: The first failure encountered by any stage.
        """
        clean_symbol = InputSanitizer.sanitize_ticker(symbol)
        if clean_symbol is None:
            raise ValueError(f"Invalid stock symbol: {symbol!r}")

        months = lookback_months if lookback_months is not None else self.config.source.lookback_months
        clean_months = InputSanitizer.sanitize_lookback(months)
        if clean_months is None:
            raise ValueError(f"Invalid lookback in months: {months!r}")

        target = Path(output_path) if output_path is not None else self.config.chart.output_path_for(clean_symbol)

        try:
            series = self.source.fetch(clean_symbol, clean_months)
            self.logger.info(f"Fetched {len(series)} data points for symbol: {clean_symbol}")
            if len(series) < MIN_OBSERVATIONS:
                self.logger.warning(f"Not enough data points for predictions for {clean_symbol}")
                raise InsufficientDataError(len(series), MIN_OBSERVATIONS)

            prices = series.closes()
            predictions = self.forecast(prices)

            spec = self.plot_builder.build(prices, predictions, clean_symbol, output_path=target)
            rendered = self.plot_builder.render(spec)
        except ForecastChartError as e:
            self.logger.error(f"Forecast chart for {clean_symbol} failed: {e}")
            raise

        self.logger.info(f"Forecast chart for {clean_symbol} ready at {rendered}")
        return rendered
