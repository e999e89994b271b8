"""Pytest configuration for all tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by configure_logging() inside a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
