"""
Tests for the debug log setup.
"""

import io
import logging

from fathom.debug import LOGGER_NAME, configure_debug_log


class TestConfigureDebugLog:
    """Tests for handler installation."""

    def test_child_loggers_reach_stream(self):
        stream = io.StringIO()
        configure_debug_log(stream=stream)
        logging.getLogger('fathom.sensing.radar').debug("creature 4 located")
        assert stream.getvalue() == "creature 4 located\n"

    def test_single_handler_after_reconfigure(self):
        configure_debug_log(stream=io.StringIO())
        logger = configure_debug_log(stream=io.StringIO())
        assert len(logger.handlers) == 1
        assert not logger.propagate

    def test_level_filters(self):
        stream = io.StringIO()
        configure_debug_log(level=logging.INFO, stream=stream)
        logger = logging.getLogger(LOGGER_NAME)
        logger.debug("hidden")
        logger.info("shown")
        assert stream.getvalue() == "shown\n"

    def test_log_file(self, tmp_path):
        path = tmp_path / "debug.log"
        logger = configure_debug_log(log_file=str(path))
        logger.debug("escape chosen")
        logger.handlers[0].flush()
        assert path.read_text() == "escape chosen\n"
        logger.handlers[0].close()
