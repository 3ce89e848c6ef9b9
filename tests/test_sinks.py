"""Tests for diagnostic sinks."""
import logging

from keychain_transform.sinks import logging_sink, null_sink


class TestSinks:
    """Tests for null_sink and logging_sink."""

    def test_null_sink(self):
        assert null_sink('ignored', 1, 2) is None

    def test_logging_sink_message(self, caplog):
        sink = logging_sink('keychain.test')
        with caplog.at_level(logging.WARNING, logger='keychain.test'):
            sink('Unable to read secret from the keychain')
        assert caplog.records[0].getMessage() == (
            'Unable to read secret from the keychain'
        )

    def test_logging_sink_context_and_exception(self, caplog):
        """Test that exceptions become exc_info and other context is appended."""
        sink = logging_sink(logging.getLogger('keychain.test'), level=logging.ERROR)
        error = RuntimeError('Not permitted')
        with caplog.at_level(logging.ERROR, logger='keychain.test'):
            sink('Unable to write 100% of secrets', error, 'extra')
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == 'Unable to write 100% of secrets extra'
        assert record.exc_info[1] is error
