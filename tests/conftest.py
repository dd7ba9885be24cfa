"""Shared test fixtures for Rytm FCP tests."""

from __future__ import annotations

import pytest

from fcp_rytm.adapter import RytmAdapter
from fcp_rytm.config import RytmConfig
from fcp_rytm.engine import RytmEngine
from fcp_rytm.model.project import Project
from fcp_rytm.parser.value import values_from_text


@pytest.fixture
def config() -> RytmConfig:
    """Config with a short lock timeout so busy tests stay fast."""
    return RytmConfig(device_id=0, lock_timeout=0.05)


@pytest.fixture
def project() -> Project:
    return Project.create("Test Project")


@pytest.fixture
def engine(project: Project, config: RytmConfig) -> RytmEngine:
    return RytmEngine(project, config)


@pytest.fixture
def adapter(config: RytmConfig) -> RytmAdapter:
    return RytmAdapter(config)


@pytest.fixture
def run(engine: RytmEngine):
    """Run ``get ...`` / ``set ...`` text against the engine and return the reply."""

    def _run(text: str):
        verb, _, rest = text.partition(" ")
        return engine.command(verb, values_from_text(rest))

    return _run
