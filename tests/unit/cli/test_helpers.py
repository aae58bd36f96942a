# tests/unit/cli/test_helpers.py
# Unit tests for CLI wiring helpers: routine loading, status rendering & the foreground tick loop

import json

import pytest
from rich.console import Console

from justlog.config.settings import JustlogSettings
from justlog.core.exceptions import FileReadError, InvalidSessionError
from justlog.core.models import SessionState
from justlog.justlog_io.console import JUSTLOG_THEME
from justlog.session.rest_timer import RestPhase, RestTimerState
from justlog.session.scheduler import PollingTickScheduler
from justlog.cli.helpers import (
    load_exercises,
    open_session,
    render_rest,
    render_status,
    run_tick_loop,
    status_payload,
)


def _render(renderable) -> str:
    console = Console(record=True, width=80, theme=JUSTLOG_THEME, color_system=None)
    console.print(renderable)
    return console.export_text()


# * Test routine loading from names & files
class TestLoadExercises:

    def test_names_only(self):
        exercises, meta = load_exercises(["Squat", "Lunge"], None)
        assert [e.name for e in exercises] == ["Squat", "Lunge"]
        assert meta == {}

    # * Test list files may mix names & full exercise objects
    def test_list_file(self, tmp_path):
        path = tmp_path / "routine.json"
        path.write_text(
            json.dumps(["Squat", {"exercise": {"id": "ex-1", "name": "Deadlift"}, "sets": []}])
        )
        exercises, _ = load_exercises(None, path)
        assert [e.name for e in exercises] == ["Squat", "Deadlift"]
        assert exercises[1].exercise.id == "ex-1"

    # * Test object files provide routine metadata; CLI names are appended
    def test_object_file(self, tmp_path):
        path = tmp_path / "routine.json"
        path.write_text(json.dumps({"routine_id": "r-7", "name": "Leg Day", "exercises": ["Squat"]}))
        exercises, meta = load_exercises(["Calf Raise"], path)
        assert [e.name for e in exercises] == ["Squat", "Calf Raise"]
        assert meta == {"routine_id": "r-7", "name": "Leg Day"}

    # * Test malformed files raise InvalidSessionError
    @pytest.mark.parametrize(
        "payload",
        [{"exercises": "Squat"}, [{"exercise": {"name": "No id"}}], [42]],
    )
    def test_invalid_file(self, tmp_path, payload):
        path = tmp_path / "routine.json"
        path.write_text(json.dumps(payload))
        with pytest.raises(InvalidSessionError):
            load_exercises(None, path)

    # * Test non-UTF-8 & missing files surface as FileReadError
    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "routine.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(FileReadError) as exc:
            load_exercises(None, path)
        assert exc.value.path == path

        with pytest.raises(FileReadError):
            load_exercises(None, tmp_path / "missing.json")


# * Test Rich renderers
class TestRendering:

    def test_no_session(self, manager):
        text = _render(render_status(manager.current_update()))
        assert "No workout in progress." in text

    # * Test active panel lists routine, state & exercises
    def test_active_session(self, manager, clock, leg_day_exercises):
        manager.start("Leg Day", leg_day_exercises)
        clock.advance(75)
        text = _render(render_status(manager.current_update()))
        assert "Leg Day" in text
        assert "active" in text
        assert "1m 15s" in text
        assert "Squat, Lunge" in text

    # * Test markup in user text is printed literally
    def test_markup_escaped(self, manager):
        manager.start("[bold]Arms[/bold]")
        assert "[bold]Arms[/bold]" in _render(render_status(manager.current_update()))

    def test_rest_panel(self):
        assert "1:30" in _render(render_rest(RestTimerState(RestPhase.ACTIVE, 90.0, 120.0)))
        assert "Rest complete" in _render(render_rest(RestTimerState(RestPhase.COMPLETED, 0.0, 60.0)))

    # * Test JSON payload shape
    def test_status_payload(self, manager):
        assert status_payload(manager.current_update())["session"] is None
        manager.start("Leg Day")
        manager.pause()
        payload = status_payload(manager.current_update())
        assert payload["state"] == SessionState.PAUSED.value
        assert payload["is_active"] is False
        assert payload["session"]["routine_name"] == "Leg Day"


# * Test session wiring over the configured file store
def test_open_session_uses_settings(tmp_path, clock):
    settings = JustlogSettings(data_dir=str(tmp_path), tick_interval=0.5)
    manager, scheduler = open_session(settings, clock=clock)
    manager.start("Leg Day")

    assert (tmp_path / "session.json").exists()
    assert scheduler.interval == 0.5
    assert scheduler.is_running

    reopened, _ = open_session(settings, clock=clock)
    assert reopened.routine_name() == "Leg Day"


# * Test foreground tick loop w/ a virtual sleep
class TestRunTickLoop:

    def test_stops_after_max_ticks(self, clock):
        scheduler = PollingTickScheduler(clock=clock, interval=1.0)
        calls = []
        scheduler.start(lambda: calls.append(clock.now()))

        fired = run_tick_loop(scheduler, max_ticks=3, sleep=clock.advance)
        assert fired == 3
        assert len(calls) == 3

    # * Test loop ends once the callback stops the scheduler
    def test_ends_when_stopped(self, clock):
        scheduler = PollingTickScheduler(clock=clock, interval=1.0)
        scheduler.start(scheduler.stop)
        assert run_tick_loop(scheduler, sleep=clock.advance) == 1

    # * Test Ctrl+C ends the loop quietly
    def test_keyboard_interrupt(self, clock):
        scheduler = PollingTickScheduler(clock=clock, interval=1.0)
        scheduler.start(lambda: None)

        def interrupt(_seconds):
            raise KeyboardInterrupt

        assert run_tick_loop(scheduler, sleep=interrupt) == 0
