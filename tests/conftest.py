from datetime import datetime

import pytest

from mission import api
from mission.lib import clock, config, store

MONDAY_10AM = datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
def test_mission(monkeypatch, tmp_path):
    """Isolated store per test.

    Provides:
    - MC_HOME pointed at a temp dir (config.yaml, mission.db)
    - remote store env cleared
    - sqlite db under the temp dir via store.set_test_db_path

    ALL tests using store.ensure() must accept this fixture to ensure isolation.
    """
    store._reset_for_testing()
    config.clear_cache()

    home = tmp_path / ".mission"
    home.mkdir()
    monkeypatch.setenv("MC_HOME", str(home))
    monkeypatch.delenv("MC_STORE_URL", raising=False)
    monkeypatch.delenv("MC_DEPLOY_KEY", raising=False)
    store.set_test_db_path(home)

    yield home

    store._reset_for_testing()
    config.clear_cache()


@pytest.fixture
def fixed_clock():
    """Clock pinned to Monday 2024-01-01 10:00 local time."""
    pinned = clock.FixedClock(MONDAY_10AM)
    clock.set_clock(pinned)
    yield pinned
    clock.set_clock(None)


@pytest.fixture
def agents(test_mission):
    """Registers two agents and returns their ids by name."""
    return {
        "jarvis": api.agents.create_agent("Jarvis", "Operations"),
        "grizman": api.agents.create_agent("Grizman", "Research"),
    }


@pytest.fixture
def task_id(test_mission):
    return api.tasks.create_task("Process receipts", "Nightly Visma queue")
