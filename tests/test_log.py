"""Tests for gsloth.log."""

import logging

import pytest

from gsloth.log import LOGGER_NAME, configure_logging, init_debug_logging


@pytest.fixture
def gsloth_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


def _stream_handlers(logger):
    return [h for h in logger.handlers if type(h) is logging.StreamHandler]


class TestConfigureLogging:
    def test_verbose_logs_debug(self, gsloth_logger, caplog):
        configure_logging(verbose=True)
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            logging.getLogger("gsloth.session").debug("turn started")
        assert "turn started" in caplog.text
        assert _stream_handlers(gsloth_logger)[0].level == logging.DEBUG

    def test_quiet_handler_level(self, gsloth_logger):
        configure_logging(verbose=False)
        assert _stream_handlers(gsloth_logger)[0].level == logging.WARNING

    def test_reconfigure_keeps_one_stream_handler(self, gsloth_logger):
        configure_logging()
        configure_logging(verbose=True)
        handlers = _stream_handlers(gsloth_logger)
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG


class TestDebugLog:
    def test_file_handler_deduplicated(self, gsloth_logger, tmp_path):
        path = tmp_path / "gaunt-sloth.log"
        first = init_debug_logging(path)
        assert init_debug_logging(path) is first

        logging.getLogger("gsloth.config").debug("loaded config")
        first.flush()
        assert "loaded config" in path.read_text()
