"""
Tests for custom exceptions.
"""

import builtins

import pytest

from dapr_http.core.exceptions import (
    UNKNOWN_ERROR_CODE,
    ConfigurationError,
    ConnectionError,
    DaprClientException,
    DaprException,
    NetworkError,
    SerializationError,
    TimeoutError,
)


class TestDaprClientException:
    """Test base DaprClientException."""

    def test_exception_message(self):
        exc = DaprClientException("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"

    def test_exception_can_be_raised(self):
        with pytest.raises(DaprClientException) as exc_info:
            raise DaprClientException("Test error")
        assert str(exc_info.value) == "Test error"


class TestDaprException:
    """Test DaprException."""

    def test_str_has_code_and_message(self):
        exc = DaprException("ERR_STATE_STORE_NOT_FOUND", "store not found", 400)

        assert str(exc) == "ERR_STATE_STORE_NOT_FOUND: store not found"
        assert exc.message == "store not found"
        assert exc.error_code == "ERR_STATE_STORE_NOT_FOUND"
        assert exc.status_code == 400

    def test_status_code_optional(self):
        exc = DaprException(UNKNOWN_ERROR_CODE, "HTTP status code: 500")
        assert exc.status_code is None
        assert str(exc) == "UNKNOWN: HTTP status code: 500"

    def test_inheritance(self):
        exc = DaprException("ERR", "msg")
        assert isinstance(exc, DaprClientException)
        assert not isinstance(exc, NetworkError)


class TestNetworkErrors:
    """Test TimeoutError and ConnectionError."""

    def test_connection_error_with_url(self):
        exc = ConnectionError("Connection refused", "http://127.0.0.1:3500/v1.0/state")

        assert "Connection refused" in str(exc)
        assert "http://127.0.0.1:3500/v1.0/state" in str(exc)
        assert exc.url == "http://127.0.0.1:3500/v1.0/state"

    def test_connection_error_without_url(self):
        exc = ConnectionError("Connection refused")
        assert str(exc) == "Connection refused"
        assert exc.url is None

    def test_timeout_error_with_timeout_value(self):
        exc = TimeoutError("Timeout", "http://127.0.0.1:3500", 30)
        message = str(exc)

        assert "http://127.0.0.1:3500" in message
        assert "30" in message
        assert exc.timeout == 30

    def test_network_hierarchy(self):
        assert issubclass(TimeoutError, NetworkError)
        assert issubclass(ConnectionError, NetworkError)
        assert issubclass(NetworkError, DaprClientException)

    def test_does_not_shadow_builtins_in_catch(self):
        """Library errors are not caught by the builtin exceptions."""
        assert not issubclass(TimeoutError, builtins.TimeoutError)
        assert not issubclass(ConnectionError, builtins.ConnectionError)


class TestOtherErrors:

    def test_serialization_error(self):
        assert issubclass(SerializationError, DaprClientException)

    def test_configuration_error(self):
        exc = ConfigurationError("bad port")
        assert str(exc) == "bad port"
