import logging

import pytest

from stock_forecast.predictor.staging import TemporaryExecutableManager


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI attaches handlers bound to the test's captured stdout; drop them afterwards."""
    yield
    package_logger = logging.getLogger("stock_forecast")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def staging_dir(tmp_path):
    return tmp_path / "staging"


@pytest.fixture
def staging(staging_dir):
    """Stages into a private directory so tests can check it is emptied."""
    return TemporaryExecutableManager(staging_dir=str(staging_dir))
