# tests/conftest.py
from __future__ import annotations

import logging

import pytest

from rent_or_sell.core.finance import project
from rent_or_sell.orchestrator import logs
from tests.utils import AS_OF, make_form, make_scenario_inputs


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clear_rentsell_env(monkeypatch):
    for key in ("RENTSELL_OUT", "RENTSELL_CHART", "RENTSELL_AS_OF", "RENTSELL_BASE_URL", "RENTSELL_DEBUG"):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Handlers bind to the stream/cwd of the test that created them; drop them afterwards."""
    yield
    pkg = logging.getLogger(logs.PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
        h.close()
    pkg.setLevel(logging.NOTSET)
    logs._FILE_HANDLER = None


# -------- Scenario fixtures --------
@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def scenario_inputs():
    """Factory for the canonical scenario with optional overrides."""

    def _factory(**overrides):
        return make_scenario_inputs(**overrides)

    return _factory


@pytest.fixture
def projection():
    """Factory to run the engine on provided inputs at the fixed reference date."""

    def _factory(fi=None, **overrides):
        if fi is None:
            fi = make_scenario_inputs(**overrides)
        return project(fi, as_of=AS_OF)

    return _factory


@pytest.fixture
def raw_form():
    def _factory(**overrides):
        return make_form(**overrides)

    return _factory
