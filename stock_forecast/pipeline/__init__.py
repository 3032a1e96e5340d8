from .orchestrator import ForecastChartCommand, build_source

__all__ = ["ForecastChartCommand", "build_source"]
