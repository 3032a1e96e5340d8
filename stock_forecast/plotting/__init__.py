from .chart_builder import ChartSpec, SeriesPlotBuilder

__all__ = ["ChartSpec", "SeriesPlotBuilder"]
