"""
Pytest configuration and fixtures for dapr-http-client tests.
"""

import pytest
import responses as responses_lib

from dapr_http.core.dapr_http import DaprHttp
from dapr_http.core.logging.config import LoggingConfig

EXPECTED_RESULT = (
    '{"data":"ewoJCSJwcm9wZXJ0eUEiOiAidmFsdWVBIiwKCQkicHJvcGVydHlCIjogInZhbHVlQiIKCX0="}'
)


@pytest.fixture
def expected_result():
    """Body the mocked sidecar answers with (a JSON document as a string)."""
    return EXPECTED_RESULT


@pytest.fixture
def sidecar_url():
    """Base URL of the mocked sidecar."""
    return "http://127.0.0.1:3500"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def dapr_http():
    """DaprHttp pointed at the default sidecar port."""
    client = DaprHttp(3500)
    yield client
    client.close()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig with file logging only (no console noise in test output).
    """
    return LoggingConfig(
        level="DEBUG",
        format="json",
        console=False,
        file_path=str(tmp_path / "dapr-client.log")
    )
