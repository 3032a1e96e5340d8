import json
from unittest.mock import Mock

import requests


def mock_successful_response(*args, **kwargs):
    """
    Mocked Tiingo response, deliberately out of order with a repeated date.
    """
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.json.return_value = [
        {"date": "2024-01-03T00:00:00.000Z", "close": 102.0, "ticker": "AAPL"},
        {"date": "2024-01-02T00:00:00.000Z", "close": 101.0, "ticker": "AAPL"},
        {"date": "2024-01-04T00:00:00.000Z", "close": 103.0, "ticker": "AAPL"},
        {"date": "2024-01-04T00:00:00.000Z", "close": 103.5, "ticker": "AAPL"},
    ]
    mock_resp.raise_for_status = Mock()
    return mock_resp


def mock_http_error_response(*args, **kwargs):
    """
    Mocked API response that raises HTTPError (4xx or 5xx).
    """
    mock_resp = Mock()
    mock_resp.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Client Error")
    return mock_resp


def mock_request_exception(*args, **kwargs):
    """
    Mocked scenario where the API call raises a RequestException (e.g., timeout).
    """
    raise requests.exceptions.RequestException("Timeout occurred")


def mock_malformed_json_response(*args, **kwargs):
    """
    Mocked response with invalid JSON content.
    """
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.raise_for_status = Mock()
    mock_resp.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
    return mock_resp


def mock_unknown_ticker_response(*args, **kwargs):
    """
    Tiingo answers unknown tickers with an object instead of a list.
    """
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.raise_for_status = Mock()
    mock_resp.json.return_value = {"detail": "Error: Ticker 'ZZZZ' not found"}
    return mock_resp


def mock_missing_close_response(*args, **kwargs):
    mock_resp = Mock()
    mock_resp.status_code = 200
    mock_resp.raise_for_status = Mock()
    mock_resp.json.return_value = [{"date": "2024-01-02T00:00:00.000Z", "open": 1.0}]
    return mock_resp
