import json
from unittest.mock import patch

import pytest

import main
from stock_forecast.errors import ProcessExecutionError


def test_validate_config_path_file_not_found(tmp_path):
    """Ensure FileNotFoundError is raised when config file does not exist."""
    with pytest.raises(FileNotFoundError):
        main.validate_config_path(str(tmp_path / "missing.yaml"))


def test_validate_config_path_none_means_defaults():
    main.validate_config_path(None)


@patch("main.ForecastChartCommand")
def test_chart_command(mock_command, tmp_path, capsys):
    """Test 'chart' command dispatches to the command object with CLI options."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("chart:\n  window: 30\n")
    instance = mock_command.from_config.return_value
    instance.produce_forecast_chart.return_value = tmp_path / "AAPL.png"

    exit_code = main.main(["chart", "AAPL", "--months", "6", "--output", "out.png", "--config", str(config_file)])

    assert exit_code == 0
    config = mock_command.from_config.call_args[0][0]
    assert config.chart.window == 30
    instance.produce_forecast_chart.assert_called_once_with("AAPL", lookback_months=6, output_path="out.png")
    assert str(tmp_path / "AAPL.png") in capsys.readouterr().out


@patch("main.ForecastChartCommand")
def test_predict_command_prints_json(mock_command, capsys):
    instance = mock_command.from_config.return_value
    instance.forecast.return_value = [105.0, 106.0]

    exit_code = main.main(["predict", "100", "101.5"])

    assert exit_code == 0
    instance.forecast.assert_called_once_with([100.0, 101.5])
    assert json.loads(capsys.readouterr().out.strip().splitlines()[-1]) == [105.0, 106.0]


@patch("main.ForecastChartCommand")
def test_pipeline_failure_returns_error_status(mock_command):
    instance = mock_command.from_config.return_value
    instance.produce_forecast_chart.side_effect = ProcessExecutionError(1, "model failed")

    assert main.main(["chart", "AAPL"]) == 1


def test_missing_config_returns_error_status(tmp_path):
    assert main.main(["chart", "AAPL", "--config", str(tmp_path / "missing.yaml")]) == 1


@patch("main.ForecastChartCommand")
def test_unexpected_errors_propagate(mock_command):
    mock_command.from_config.return_value.produce_forecast_chart.side_effect = RuntimeError("bug")
    with pytest.raises(RuntimeError):
        main.main(["chart", "AAPL"])


def test_main_invalid_command():
    """Test that argparse exits on invalid command."""
    with pytest.raises(SystemExit):
        main.main(["invalid"])


def test_malformed_yaml_config_returns_error_status(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("chart: [unbalanced")
    assert main.main(["chart", "AAPL", "--config", str(config_file)]) == 1


def test_invalid_filename_template_returns_error_status(tmp_path):
    config_file = tmp_path / "template.yaml"
    config_file.write_text("chart:\n  filename_template: \"{ticker}.png\"\n")
    assert main.main(["chart", "AAPL", "--config", str(config_file)]) == 1


@patch("main.ForecastChartCommand")
def test_key_error_from_pipeline_returns_error_status(mock_command):
    mock_command.from_config.return_value.produce_forecast_chart.side_effect = KeyError("symbol")
    assert main.main(["chart", "AAPL"]) == 1
