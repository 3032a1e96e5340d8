import json
import math

import pytest

from stock_forecast.errors import InsufficientDataError, ProtocolError
from stock_forecast.predictor.protocol import (
    ForecastRequest,
    decode_response,
    encode_request,
    summarize,
)


def test_encode_request_shape():
    payload = json.loads(encode_request(ForecastRequest.from_prices([100, 101.5])))
    assert payload == {"prices": [100.0, 101.5]}


def test_request_rejects_non_finite_prices():
    with pytest.raises(ValueError):
        ForecastRequest.from_prices([1.0, math.nan])
    with pytest.raises(ValueError):
        ForecastRequest.from_prices([1.0, math.inf])


@pytest.mark.parametrize("prices", [[], [100.0]])
def test_validate_requires_two_prices(prices):
    with pytest.raises(InsufficientDataError) as exc_info:
        ForecastRequest.from_prices(prices).validate()
    assert exc_info.value.count == len(prices)
    assert exc_info.value.required == 2


def test_validate_accepts_two_prices():
    ForecastRequest.from_prices([1.0, 2.0]).validate()


def test_decode_preserves_order():
    assert decode_response("[105, 106.5, 104]\n") == [105.0, 106.5, 104.0]


def test_decode_empty_array_is_valid():
    assert decode_response("[]") == []


@pytest.mark.parametrize("raw", ["not json", "", '{"forecast": [1]}', "[1, \"2\"]", "[true, 1.0]", "[[1]]"])
def test_decode_rejects_malformed_output(raw):
    with pytest.raises(ProtocolError) as exc_info:
        decode_response(raw)
    assert exc_info.value.raw_output == raw
    assert exc_info.value.diagnostic


def test_summarize_truncates_long_sequences():
    text = summarize([float(i) for i in range(100)])
    assert "..." in text
    assert "(100 values)" in text
    assert summarize([1.0, 2.0]) == "[1, 2]"
