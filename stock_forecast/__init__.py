"""Stock price forecast charting: fetch a series, ask a predictor, plot both."""

__version__ = "0.1.0"
