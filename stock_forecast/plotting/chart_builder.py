# stock_forecast/plotting/chart_builder.py
"""
Two-series forecast chart.

The last ``window`` historical prices are drawn at x = 0 .. len(window) - 1
and the forecast continues at x = len(window) + i, so the prediction line
starts exactly where the history ends.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from stock_forecast.errors import PlottingError

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 90
FIGURE_SIZE_INCHES = (8, 4)

Point = Tuple[float, float]


def _default_file_mode() -> int:
    """Mode a plainly created file would get under the current umask (mkstemp forces 0600)."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@dataclass(frozen=True)
class ChartSpec:
    """Everything needed to draw one chart. Built fresh for every render."""

    historical_window: Tuple[float, ...]
    forecast: Tuple[float, ...]
    label: str
    output_path: Optional[Path] = None

    def historical_points(self) -> List[Point]:
        return [(float(i), price) for i, price in enumerate(self.historical_window)]

    def forecast_points(self) -> List[Point]:
        offset = len(self.historical_window)
        return [(float(offset + i), value) for i, value in enumerate(self.forecast)]

    @property
    def title(self) -> str:
        return f"Stock Prices and Predictions for {self.label}"


class SeriesPlotBuilder:
    """
    Builds ChartSpecs and renders them to PNG files.

    Attributes:
        window (int): Maximum number of trailing historical prices shown.
        dpi (int): Raster resolution; the figure is always 8 x 4 inches.
        stock_color (str): Colour of the historical "Stock" line.
        prediction_color (str): Colour of the "Prediction" line.
    """

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        dpi: int = 100,
        stock_color: str = "#ff0000",
        prediction_color: str = "#00ff00",
    ) -> None:
        if window < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        self.window = window
        self.dpi = dpi
        self.stock_color = stock_color
        self.prediction_color = prediction_color

    def trailing_window(self, prices: Sequence[float]) -> Tuple[float, ...]:
        start = max(0, len(prices) - self.window)
        return tuple(float(p) for p in prices[start:])

    def build(
        self,
        prices: Sequence[float],
        forecast: Sequence[float],
        label: str,
        output_path: Optional[Union[str, Path]] = None,
    ) -> ChartSpec:
        """
        Combine the trailing historical window with the forecast.

        Args:
            prices (Sequence[float]): Full historical series, oldest first.
            forecast (Sequence[float]): Forecast values, nearest step first. May be empty.
            label (str): Symbol shown in the title.
            output_path (str | Path, optional): Default destination for ``render``.

        Returns:
            ChartSpec: The chart description.
        """
        return ChartSpec(
            historical_window=self.trailing_window(prices),
            forecast=tuple(float(v) for v in forecast),
            label=label,
            output_path=Path(output_path) if output_path is not None else None,
        )

    def draw(self, spec: ChartSpec) -> Figure:
        """
        Draw the chart on a new Figure detached from pyplot's global state.
        """
        fig = Figure(figsize=FIGURE_SIZE_INCHES, dpi=self.dpi)
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(1, 1, 1)

        hist = spec.historical_points()
        pred = spec.forecast_points()
        ax.plot([x for x, _ in hist], [y for _, y in hist], color=self.stock_color, label="Stock")
        # Plotted even when empty so the legend always maps both colours
        ax.plot([x for x, _ in pred], [y for _, y in pred], color=self.prediction_color, label="Prediction")

        ax.set_title(spec.title)
        ax.set_xlabel("Days")
        ax.set_ylabel("Price")
        ax.legend()
        fig.tight_layout()
        return fig

    def render(self, spec: ChartSpec, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Render the chart to a PNG file, replacing any previous chart atomically.

        Args:
            spec (ChartSpec): Chart to draw.
            path (str | Path, optional): Destination. Defaults to ``spec.output_path``.

        Returns:
            Path: The written file.

        Raises:
            PlottingError: If drawing fails or the destination cannot be written.
        """
        target = Path(path) if path is not None else spec.output_path
        if target is None:
            raise PlottingError("No output path given for chart.")

        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.stem}_", suffix=".png", dir=target.parent)
            os.close(fd)
            fig = self.draw(spec)
            fig.savefig(tmp_name, format="png", dpi=self.dpi)
            os.chmod(tmp_name, _default_file_mode())
            os.replace(tmp_name, target)
            tmp_name = None
        except (OSError, ValueError, RuntimeError) as exc:
            logger.error(f"Error plotting data to {target}: {exc}")
            raise PlottingError(f"Could not write chart to {target}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        logger.info(
            f"Chart for {spec.label} saved to {target} "
            f"({len(spec.historical_window)} historical, {len(spec.forecast)} forecast points)"
        )
        return target
