# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic test runs

import json
from pathlib import Path

import pytest

from justlog.core.models import Exercise, WorkoutExercise
from justlog.justlog_io.kv_store import MemoryStore
from justlog.session.manager import create_session_manager
from tests.test_support.fakes import ManualClock, ManualTickScheduler


@pytest.fixture(autouse=True)
def isolate_config(tmp_path_factory, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path_factory.mktemp("fake_home")

    justlog_dir = fake_home / ".justlog"
    justlog_dir.mkdir()

    # Create minimal config.json w/ test defaults
    config_data = {
        "data_dir": "",
        "session_filename": "session.json",
        "tick_interval": 1.0,
        "default_rest_seconds": 90,
        "weight_unit": "KG",
        "distance_unit": "KM",
    }

    config_file = justlog_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(config_data, f, indent=2)

    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("JUSTLOG_HOME", raising=False)

    # ! reset global settings_manager state & point it at the isolated location
    from justlog.config.settings import settings_manager

    settings_manager.config_path = config_file

    # ! reset output manager to NullOutputManager & console for test isolation
    from justlog.core.output import reset_output_manager
    from justlog.justlog_io.console import reset_console

    reset_output_manager()
    reset_console()

    yield fake_home

    reset_output_manager()


@pytest.fixture(autouse=True)
def block_network():
    # Block all network calls by default w/ pytest-socket
    try:
        pytest_socket = pytest.importorskip("pytest_socket")
        pytest_socket.disable_socket()
    except pytest.skip.Exception:
        # Pytest-socket not installed, skip network blocking
        pass


@pytest.fixture
def clock():
    return ManualClock(start=1_000.0)


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def manager(store, clock, scheduler):
    # Recovered manager over an empty in-memory store
    return create_session_manager(store, clock=clock, scheduler=scheduler)


@pytest.fixture
def leg_day_exercises():
    return [
        WorkoutExercise(exercise=Exercise(id="ex-squat", name="Squat", primary_muscles=("legs",))),
        WorkoutExercise(exercise=Exercise(id="ex-lunge", name="Lunge", primary_muscles=("legs",))),
    ]
