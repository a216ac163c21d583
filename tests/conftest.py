"""Shared test fixtures for azcred.

Provides a virtual clock so the device code polling loop can be driven
deterministically, without real sleeps or network access.  These fixtures
are automatically discovered by pytest and available to all test modules
without explicit imports; the scripted server lives in
:mod:`scripted_server`.
"""

from __future__ import annotations

import pytest

from azcred.output import reset_output
from scripted_server import FakeClock


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager around every test.

    The OutputManager caches a reference to sys.stderr at creation time;
    resetting lets capsys-captured streams be picked up by the next one.
    """
    reset_output()
    yield
    reset_output()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
