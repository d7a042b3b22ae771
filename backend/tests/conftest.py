"""Shared fixtures: settings and a planner factory over in-memory capabilities."""

import logfire
import pytest

from eventplanner.config import Settings
from eventplanner.pipeline import Capabilities, EventPlanner
from tests.fakes import TODAY, FakeDrafting, FakeExtraction, FakeLookup

# Configure logfire before any span is opened
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, data_dir=tmp_path)


@pytest.fixture
def make_planner(settings):
    """Build a planner over fakes; keyword arguments replace individual fakes."""

    def _make(extraction=None, drafting=None, lookup=None, no_lookup=False, **overrides):
        capabilities = Capabilities(
            extraction=extraction or FakeExtraction(),
            drafting=drafting or FakeDrafting(),
            lookup=None if no_lookup else (lookup or FakeLookup()),
        )
        planner_settings = settings.model_copy(update=overrides) if overrides else settings
        return EventPlanner(planner_settings, capabilities, today=lambda: TODAY)

    return _make
