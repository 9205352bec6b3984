"""Shared pytest configuration.

The default error handler is a process-wide singleton. Every test that
registers on it would leak actions and bindings into the next one, so it is
cleared after each test.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from errorhandler import default_error_handler


@pytest.fixture(autouse=True)
def clear_default_error_handler() -> Iterator[None]:
    yield
    default_error_handler().clear()
