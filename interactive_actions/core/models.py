# interactive_actions/core/models.py
from __future__ import annotations

"""Action and interaction schema
--------------------------------
Pydantic models for actions, interactions and their results, plus helpers that
validate already-parsed mappings into models with readable error messages.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
    model_validator,
)

from interactive_actions.core.errors import InvalidActionConfig


# Captured variable name -> value, shared by every action of one run.
VarBag = dict[str, str]

# Shape-discriminated: str for input, int (option index) for select, bool for confirm.
DefaultValue = Union[StrictBool, StrictInt, StrictStr]


# ---------- Core enums ----------


class ActionHook(str, Enum):
    after = "after"
    before = "before"


class InteractionKind(str, Enum):
    confirm = "confirm"
    input = "input"
    select = "select"


class ResponseKind(str, Enum):
    text = "text"
    cancel = "cancel"
    none = "none"


def _default_matches(kind: InteractionKind, value: Any) -> bool:
    if kind is InteractionKind.confirm:
        return isinstance(value, bool)
    if kind is InteractionKind.select:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


# ---------- Interaction ----------


class Interaction(BaseModel):
    """
    A declarative prompt: confirm, free-text input or single select.

    When `out` is set, the answer is captured into the variable bag under that
    name. A configured `default_value` pre-answers the question, which is then
    skipped unless `ask_if_has_default` is true.
    """

    model_config = ConfigDict(frozen=True)

    kind: InteractionKind
    prompt: str = Field(..., description="What to ask the user")
    out: Optional[str] = Field(default=None, description="Variable name receiving the answer")
    options: Optional[list[str]] = Field(default=None, description="Choices, for kind=select only")
    default_value: Optional[DefaultValue] = None
    ask_if_has_default: Optional[StrictBool] = Field(
        default=None, description="Ask even when a default answer is configured"
    )

    @field_validator("out")
    @classmethod
    def _out_non_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("out cannot be empty")
        return v

    @model_validator(mode="after")
    def _default_agrees_with_kind(self) -> "Interaction":
        if self.kind is InteractionKind.select and not self.options:
            raise ValueError("select interaction requires a non-empty 'options' list")
        if self.default_value is None:
            return self
        if not _default_matches(self.kind, self.default_value):
            raise ValueError(
                f"default_value {self.default_value!r} does not fit a '{self.kind.value}' interaction"
            )
        if self.kind is InteractionKind.select and not 0 <= self.default_value < len(self.options):
            raise ValueError(
                f"default_value index {self.default_value} is out of range for {len(self.options)} option(s)"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialized form; absent optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------- Action ----------


class Action(BaseModel):
    """A named unit of a workflow: an optional prompt, an optional script, and policy flags."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique name within a workflow")
    interaction: Optional[Interaction] = None
    run: Optional[str] = Field(default=None, description="Script to hand to the run collaborator")
    ignore_exit: StrictBool = Field(default=False, description="Keep going after a non-zero exit code")
    break_if_cancel: StrictBool = Field(default=False, description="Stop the workflow when the prompt is canceled")
    capture: StrictBool = Field(default=False, description="Capture script output instead of streaming it")
    hook: ActionHook = Field(default=ActionHook.after)

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    def to_dict(self) -> dict[str, Any]:
        """Serialized form; fields equal to their defaults are omitted."""
        data = self.model_dump(mode="json", exclude_defaults=True)
        if self.interaction is not None:
            data["interaction"] = self.interaction.to_dict()
        return data


# ---------- Results ----------


class RunResult(BaseModel):
    """Snapshot of one script execution, produced by the run collaborator."""

    model_config = ConfigDict(frozen=True)

    script: str
    code: int
    out: str = ""
    err: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


class Response(BaseModel):
    """Normalized outcome of an interaction."""

    model_config = ConfigDict(frozen=True)

    kind: ResponseKind
    value: Optional[str] = None

    @model_validator(mode="after")
    def _value_only_for_text(self) -> "Response":
        if self.kind is ResponseKind.text and self.value is None:
            raise ValueError("text response requires a value")
        if self.kind is not ResponseKind.text and self.value is not None:
            raise ValueError(f"{self.kind.value} response cannot carry a value")
        return self

    @classmethod
    def text(cls, value: str) -> "Response":
        return cls(kind=ResponseKind.text, value=value)

    @classmethod
    def cancel(cls) -> "Response":
        return cls(kind=ResponseKind.cancel)

    @classmethod
    def none(cls) -> "Response":
        return cls(kind=ResponseKind.none)

    @property
    def is_text(self) -> bool:
        return self.kind is ResponseKind.text

    @property
    def is_cancel(self) -> bool:
        return self.kind is ResponseKind.cancel


class ActionResult(BaseModel):
    """Record of one executed action. Output only; never loaded back into an Action."""

    model_config = ConfigDict(frozen=True)

    name: str
    run: Optional[RunResult] = None
    response: Response = Field(default_factory=Response.none)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# ---------- Workflow (owning collection) ----------


class Workflow(BaseModel):
    """An ordered sequence of actions with unique names."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    actions: list[Action] = Field(default_factory=list)

    @field_validator("actions")
    @classmethod
    def _unique_names(cls, v: list[Action]) -> list[Action]:
        seen: set[str] = set()
        dupes: list[str] = []
        for action in v:
            if action.name in seen and action.name not in dupes:
                dupes.append(action.name)
            seen.add(action.name)
        if dupes:
            raise ValueError(f"duplicate action name(s): {', '.join(dupes)}")
        return v

    def for_hook(self, hook: ActionHook | str) -> list[Action]:
        """Actions of one hook phase, in declaration order."""
        phase = ActionHook(hook)
        return [a for a in self.actions if a.hook is phase]

    def before(self) -> list[Action]:
        return self.for_hook(ActionHook.before)

    def after(self) -> list[Action]:
        return self.for_hook(ActionHook.after)

    def get(self, name: str) -> Optional[Action]:
        return next((a for a in self.actions if a.name == name), None)


# ---------- Public API ----------


def _describe(ve: ValidationError, label: str) -> str:
    lines = [f"Invalid {label}:"]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")
    return "\n".join(lines)


def load_action(data: Any) -> Action:
    """Validate one already-parsed action mapping."""
    if isinstance(data, Action):
        return data
    if not isinstance(data, dict):
        raise InvalidActionConfig("Action must be a mapping/object.")
    try:
        return Action.model_validate(data)
    except ValidationError as ve:
        raise InvalidActionConfig(_describe(ve, f"action '{data.get('name', '<unnamed>')}'")) from ve


def load_workflow(data: Any) -> Workflow:
    """
    Validate an already-parsed workflow: either a mapping with an `actions` list
    or a bare list of action mappings.
    """
    if isinstance(data, Workflow):
        return data
    if isinstance(data, list):
        data = {"actions": data}
    if not isinstance(data, dict):
        raise InvalidActionConfig("Workflow must be a mapping/object or a list of actions.")
    try:
        return Workflow.model_validate(data)
    except ValidationError as ve:
        raise InvalidActionConfig(_describe(ve, f"workflow '{data.get('name') or '<unnamed>'}'")) from ve


__all__ = [
    "VarBag",
    "DefaultValue",
    "ActionHook",
    "InteractionKind",
    "ResponseKind",
    "Interaction",
    "Action",
    "RunResult",
    "Response",
    "ActionResult",
    "Workflow",
    "load_action",
    "load_workflow",
]
