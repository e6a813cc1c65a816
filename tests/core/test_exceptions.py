import pytest

from procviz.core.exceptions import ConfigurationError, ProcessorError, SequenceAbandoned


class TestProcessorError:
    """Test ProcessorError base exception class."""

    def test_processor_error_creation_basic(self):
        exc = ProcessorError("Test error message")

        assert str(exc) == "Test error message"
        assert exc.details == {}

    def test_processor_error_with_details(self):
        details = {"key1": "value1", "key2": 42}
        exc = ProcessorError("message", details=details)

        assert exc.details == details

    def test_processor_error_none_details_defaults_to_empty(self):
        exc = ProcessorError("message", details=None)

        assert exc.details == {}


class TestConfigurationError:
    """Test ConfigurationError exception class."""

    def test_message_only_uses_default_key(self):
        exc = ConfigurationError("Missing required config key: 'processor'")

        assert exc.config_key == "configuration"
        assert "Missing required config key" in str(exc)

    def test_key_and_message(self):
        exc = ConfigurationError("processor.cycle_time_ms", "must be >= 0")

        assert exc.config_key == "processor.cycle_time_ms"
        assert str(exc) == "Configuration error for 'processor.cycle_time_ms': must be >= 0"

    def test_is_processor_error(self):
        with pytest.raises(ProcessorError):
            raise ConfigurationError("bad")


def test_sequence_abandoned_records_generations():
    exc = SequenceAbandoned(generation=2, current=3)

    assert exc.generation == 2
    assert exc.current == 3
    assert exc.details == {"generation": 2, "current": 3}
    assert isinstance(exc, ProcessorError)
