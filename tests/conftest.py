"""Shared fixtures: a captured console and a clean package logger."""

import io
import logging

import pytest
from httpcli.output import OutputStyle, ResponseRenderer


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger("httpcli")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def console_buffer():
    """Monochrome console writing into a StringIO."""
    buffer = io.StringIO()
    console = OutputStyle(color=False).make_console(file=buffer, width=120)
    return console, buffer


@pytest.fixture
def renderer(console_buffer):
    console, _ = console_buffer
    return ResponseRenderer(console, OutputStyle(color=False))
