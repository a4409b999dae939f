import pytest

from interactive_actions.core.engine import Engine, run_actions
from interactive_actions.core.errors import EngineError
from interactive_actions.core.models import Response, RunResult, load_workflow
from interactive_actions.core.prompting import KeyInputs, ScriptedEvents


class FakeRunner:
    """Records scripts and returns scripted exit codes (0 unless listed)."""

    def __init__(self, codes=None):
        self.codes = codes or {}
        self.calls = []

    def run(self, script, *, capture, varbag):
        self.calls.append((script, capture, dict(varbag)))
        return RunResult(script=script, code=self.codes.get(script, 0), out="", err="")


def test_captured_values_reach_later_scripts():
    wf = load_workflow(
        [
            {"name": "name", "interaction": {"kind": "input", "prompt": "Name?", "out": "name"}},
            {"name": "greet", "run": "echo hi", "capture": True},
        ]
    )
    runner = FakeRunner()
    bag = {}
    results = Engine(runner).run(wf, varbag=bag, events=ScriptedEvents().answer("Ada"))

    assert [r.name for r in results] == ["name", "greet"]
    assert results[0].response == Response.text("Ada")
    assert results[1].response == Response.none()
    assert results[1].run.code == 0
    assert runner.calls == [("echo hi", True, {"name": "Ada"})]
    assert bag == {"name": "Ada"}


def test_interaction_runs_before_script_of_same_action():
    wf = load_workflow(
        [
            {
                "name": "tag",
                "interaction": {"kind": "input", "prompt": "Tag?", "out": "tag"},
                "run": "git tag",
            }
        ]
    )
    runner = FakeRunner()
    run_actions(wf, runner=runner, events=ScriptedEvents().answer("v1"))
    assert runner.calls == [("git tag", False, {"tag": "v1"})]


def test_break_if_cancel_stops_the_run():
    wf = load_workflow(
        [
            {"name": "sure", "interaction": {"kind": "confirm", "prompt": "Sure?"}, "break_if_cancel": True, "run": "a"},
            {"name": "after", "run": "b"},
        ]
    )
    runner = FakeRunner()
    results = Engine(runner).run(wf, events=ScriptedEvents().press("n", KeyInputs.ENTER))
    assert [r.name for r in results] == ["sure"]
    assert results[0].response.is_cancel
    assert results[0].run is None
    assert runner.calls == []


def test_cancel_without_break_continues():
    wf = load_workflow(
        [
            {"name": "name", "interaction": {"kind": "input", "prompt": "Name?", "out": "name"}},
            {"name": "next", "run": "b"},
        ]
    )
    runner = FakeRunner()
    bag = {}
    results = Engine(runner).run(wf, varbag=bag, events=ScriptedEvents().press(KeyInputs.CTRL_C))
    assert [r.name for r in results] == ["name", "next"]
    assert results[0].response.is_cancel
    assert bag == {}


def test_non_zero_exit_stops_unless_ignored():
    wf = load_workflow(
        [
            {"name": "lint", "run": "lint", "ignore_exit": True},
            {"name": "test", "run": "test"},
            {"name": "ship", "run": "ship"},
        ]
    )
    runner = FakeRunner(codes={"lint": 1, "test": 2})
    results = Engine(runner).run(wf)
    assert [r.name for r in results] == ["lint", "test"]
    assert [r.run.code for r in results] == [1, 2]
    assert [c[0] for c in runner.calls] == ["lint", "test"]


def test_hook_filters_actions():
    wf = load_workflow(
        [
            {"name": "pre", "run": "pre", "hook": "before"},
            {"name": "main", "run": "main"},
            {"name": "pre2", "run": "pre2", "hook": "before"},
        ]
    )
    runner = FakeRunner()
    assert [r.name for r in Engine(runner).run(wf, hook="before")] == ["pre", "pre2"]
    assert [r.name for r in Engine(runner).run(wf.actions, hook="after")] == ["main"]


def test_script_without_runner_is_an_error():
    wf = load_workflow([{"name": "x", "run": "echo"}])
    with pytest.raises(EngineError):
        Engine().run(wf)


def test_no_op_action_records_empty_result():
    results = Engine().run(load_workflow([{"name": "noop"}]))
    assert len(results) == 1
    assert results[0].run is None
    assert results[0].response == Response.none()


def test_run_actions_passes_bag_and_hook_through():
    wf = load_workflow(
        [
            {"name": "pre", "interaction": {"kind": "input", "prompt": "Env?", "out": "env"}, "hook": "before"},
            {"name": "main", "run": "deploy"},
        ]
    )
    runner = FakeRunner()
    bag = {"user": "ada"}
    results = run_actions(wf, runner=runner, varbag=bag, events=ScriptedEvents().answer("prod"), hook="before")
    assert [r.name for r in results] == ["pre"]
    assert bag == {"user": "ada", "env": "prod"}
    assert runner.calls == []
