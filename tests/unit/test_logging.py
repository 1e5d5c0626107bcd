import logging
from io import StringIO

import pytest

from clawapi.core.logging import (
    NOISY_HTTP_LOGGERS,
    ConversationLogger,
    CorrelationFormatter,
    HttpRequestLogDowngradeFilter,
    configure_root_logging,
    normalize_log_level,
    set_noisy_http_logger_levels,
)


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestHttpRequestLogDowngradeFilter:
    def setup_method(self) -> None:
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        self.handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))

    def _emit(self, logger_name: str, level: int, message: str) -> str:
        logger = logging.getLogger(logger_name)
        logger.handlers = [self.handler]
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.log(level, message)
        self.handler.flush()
        output = self.stream.getvalue()
        self.stream.truncate(0)
        self.stream.seek(0)
        return output

    def test_downgrades_noisy_http_info_logs(self):
        output = self._emit("httpx", logging.INFO, "HTTP Request: GET https://claude.ai")
        assert output.startswith("DEBUG:HTTP Request: GET")

    def test_preserves_non_noisy_info_logs(self):
        output = self._emit("conversation", logging.INFO, "Important info message")
        assert output.startswith("INFO:Important info message")


@pytest.mark.unit
class TestNoisyHttpLoggerLevelSetter:
    def test_sets_warning_by_default(self):
        set_noisy_http_logger_levels("INFO")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_stays_debug_when_global_debug(self):
        set_noisy_http_logger_levels("DEBUG")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG


@pytest.mark.unit
class TestCorrelationFormatter:
    def test_adds_correlation_id_attribute(self):
        record = _record()
        record.correlation_id = "1234567890"

        assert CorrelationFormatter("%(message)s").format(record) == "[12345678] hello"

    def test_uses_correlation_context(self):
        formatter = CorrelationFormatter("%(message)s")

        with ConversationLogger.correlation_context("abcdef123456"):
            assert ConversationLogger.current_correlation_id() == "abcdef123456"
            assert formatter.format(_record()) == "[abcdef12] hello"

        assert ConversationLogger.current_correlation_id() is None
        assert formatter.format(_record()) == "hello"

    def test_record_is_not_mutated(self):
        record = _record()
        with ConversationLogger.correlation_context("abcdef123456"):
            CorrelationFormatter("%(message)s").format(record)
        assert record.msg == "hello"


@pytest.mark.unit
class TestConfigureRootLogging:
    def test_installs_single_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_root_logging("debug extra words")
            configure_root_logging("WARNING")

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, CorrelationFormatter)
            assert root.level == logging.WARNING
            assert logging.getLogger("uvicorn").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    @pytest.mark.parametrize(
        "raw, level",
        [("debug", "DEBUG"), ("INFO  # comment", "INFO"), ("", "INFO"), ("loud", "INFO")],
    )
    def test_normalize_log_level(self, raw, level):
        assert normalize_log_level(raw) == level
