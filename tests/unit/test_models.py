import pytest
from pydantic import ValidationError

from interactive_actions.core.errors import InvalidActionConfig
from interactive_actions.core.models import (
    Action,
    ActionHook,
    ActionResult,
    Interaction,
    InteractionKind,
    Response,
    ResponseKind,
    RunResult,
    load_action,
    load_workflow,
)


def test_action_defaults_are_omitted_when_serialized():
    action = Action(name="greet", interaction=Interaction(kind="input", prompt="Name?", out="name"))
    assert action.to_dict() == {
        "name": "greet",
        "interaction": {"kind": "input", "prompt": "Name?", "out": "name"},
    }


def test_action_non_defaults_are_serialized():
    action = Action(name="deploy", run="make deploy", ignore_exit=True, capture=True, hook="before")
    assert action.to_dict() == {
        "name": "deploy",
        "run": "make deploy",
        "ignore_exit": True,
        "capture": True,
        "hook": "before",
    }


def test_explicit_false_ask_flag_is_kept():
    interaction = Interaction(kind="confirm", prompt="Sure?", default_value=False, ask_if_has_default=False)
    assert interaction.to_dict() == {
        "kind": "confirm",
        "prompt": "Sure?",
        "default_value": False,
        "ask_if_has_default": False,
    }


@pytest.mark.parametrize(
    "kind, default",
    [("input", "guest"), ("select", 1), ("confirm", True)],
)
def test_default_shape_follows_kind(kind, default):
    options = ["a", "b"] if kind == "select" else None
    interaction = Interaction.model_validate(
        {"kind": kind, "prompt": "?", "options": options, "default_value": default}
    )
    assert interaction.default_value == default
    assert type(interaction.default_value) is type(default)


@pytest.mark.parametrize(
    "kind, default",
    [("input", 1), ("input", True), ("select", "a"), ("select", True), ("confirm", "yes"), ("confirm", 0)],
)
def test_mismatched_default_is_rejected(kind, default):
    options = ["a", "b"] if kind == "select" else None
    with pytest.raises(ValidationError):
        Interaction(kind=kind, prompt="?", options=options, default_value=default)


def test_select_requires_options():
    with pytest.raises(ValidationError, match="options"):
        Interaction(kind="select", prompt="Pick")
    with pytest.raises(ValidationError, match="options"):
        Interaction(kind="select", prompt="Pick", options=[])


@pytest.mark.parametrize("index", [2, -1])
def test_select_default_must_index_an_option(index):
    with pytest.raises(ValidationError, match="out of range"):
        Interaction(kind="select", prompt="Pick", options=["a", "b"], default_value=index)


def test_action_name_cannot_be_blank():
    with pytest.raises(ValidationError):
        Action(name="   ")


def test_action_may_be_a_no_op():
    action = Action(name="noop")
    assert action.interaction is None and action.run is None
    assert action.hook is ActionHook.after
    assert not (action.ignore_exit or action.break_if_cancel or action.capture)


def test_response_variants():
    assert Response.text("x").is_text
    assert Response.cancel().is_cancel
    assert Response.none().kind is ResponseKind.none
    with pytest.raises(ValidationError):
        Response(kind="text")
    with pytest.raises(ValidationError):
        Response(kind="cancel", value="x")


def test_action_result_defaults_to_no_response():
    result = ActionResult(name="noop")
    assert result.response == Response.none()
    assert result.to_dict() == {"name": "noop", "run": None, "response": {"kind": "none", "value": None}}


def test_run_result_ok():
    assert RunResult(script="true", code=0).ok
    assert not RunResult(script="false", code=1, err="boom").ok


def test_load_action_reports_field_errors():
    with pytest.raises(InvalidActionConfig) as exc:
        load_action({"name": "pick", "interaction": {"kind": "select", "prompt": "Pick"}})
    message = str(exc.value)
    assert message.startswith("Invalid action 'pick':")
    assert "interaction" in message


def test_load_action_rejects_non_mapping():
    with pytest.raises(InvalidActionConfig):
        load_action(["not", "a", "mapping"])


def test_load_workflow_from_list_and_hooks():
    wf = load_workflow(
        [
            {"name": "check", "run": "git status", "hook": "before"},
            {"name": "ask", "interaction": {"kind": "confirm", "prompt": "Ship?"}},
            {"name": "ship", "run": "make ship"},
        ]
    )
    assert [a.name for a in wf.for_hook("before")] == ["check"]
    assert [a.name for a in wf.for_hook(ActionHook.after)] == ["ask", "ship"]
    assert [a.name for a in wf.before()] == ["check"]
    assert [a.name for a in wf.after()] == ["ask", "ship"]
    assert wf.get("ask").interaction.kind is InteractionKind.confirm
    assert wf.get("missing") is None


def test_load_workflow_rejects_duplicate_names():
    with pytest.raises(InvalidActionConfig, match="duplicate action name"):
        load_workflow({"name": "dupes", "actions": [{"name": "a"}, {"name": "a"}]})


def test_models_are_immutable():
    action = Action(name="a")
    with pytest.raises(ValidationError):
        action.name = "b"


@pytest.mark.parametrize("flag", ["ignore_exit", "break_if_cancel", "capture"])
def test_policy_flags_must_be_real_booleans(flag):
    with pytest.raises(InvalidActionConfig, match=flag):
        load_action({"name": "x", flag: "yes"})
    assert getattr(load_action({"name": "x", flag: True}), flag) is True


def test_ask_if_has_default_must_be_a_boolean():
    with pytest.raises(ValidationError):
        Interaction(kind="input", prompt="Name?", default_value="guest", ask_if_has_default="yes")
