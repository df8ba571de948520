"""Tests for verbose logging control."""

import io
import logging

import pytest

from netlist_rebuild.logging import disable_verbose, enable_verbose, level_for_verbosity


def stream_handlers(logger):
    return [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]


class TestVerboseLogging:
    def test_silent_by_default(self):
        logger = logging.getLogger("netlist_rebuild")
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert stream_handlers(logger) == []

    def test_enable_and_disable(self):
        logger = logging.getLogger("netlist_rebuild")
        try:
            enable_verbose("debug")
            assert logger.level == logging.DEBUG
            assert len(stream_handlers(logger)) == 1

            # Enabling twice does not stack handlers
            enable_verbose("INFO", format="%(message)s")
            assert len(stream_handlers(logger)) == 1
        finally:
            disable_verbose()

        assert logger.level == logging.WARNING
        assert stream_handlers(logger) == []

    def test_records_reach_stream(self):
        stream = io.StringIO()
        try:
            enable_verbose("INFO", stream=stream)
            logging.getLogger("netlist_rebuild.rebuild").info("Placement progress: 1/1")
        finally:
            disable_verbose()

        assert "[INFO] netlist_rebuild.rebuild: Placement progress: 1/1" in stream.getvalue()


@pytest.mark.parametrize("count,level", [(0, "WARNING"), (1, "INFO"), (2, "DEBUG"), (5, "DEBUG")])
def test_level_for_verbosity(count, level):
    assert level_for_verbosity(count) == level
