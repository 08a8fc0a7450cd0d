"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest


@pytest.fixture(autouse=True)
def method_mox_debug_logging(
    caplog: pytest.LogCaptureFixture,
) -> t.Generator[None, None, None]:
    """Capture ``method_mox`` debug records so failing tests show them."""
    with caplog.at_level(logging.DEBUG, logger="method_mox"):
        yield
