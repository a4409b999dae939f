"""
Declarative interactive actions.

Run named actions against a user in a terminal session: each action may pose a
prompt (confirm / input / select), capture the answer into a shared variable
bag, hand a script to a run collaborator, and decide whether the rest of the
sequence continues.
"""

from interactive_actions.core.engine import Engine, ScriptRunner, run_actions
from interactive_actions.core.errors import (
    EngineError,
    InteractiveActionsError,
    InvalidActionConfig,
    InvalidInteractionConfig,
    PromptSessionError,
)
from interactive_actions.core.models import (
    Action,
    ActionHook,
    ActionResult,
    Interaction,
    InteractionKind,
    Response,
    ResponseKind,
    RunResult,
    VarBag,
    Workflow,
    load_action,
    load_workflow,
)
from interactive_actions.core.player import play
from interactive_actions.core.prompting import (
    KeyInputs,
    PromptSurface,
    ScriptedEvents,
    ScriptedSurface,
    TerminalSurface,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionHook",
    "ActionResult",
    "Engine",
    "EngineError",
    "Interaction",
    "InteractionKind",
    "InteractiveActionsError",
    "InvalidActionConfig",
    "InvalidInteractionConfig",
    "KeyInputs",
    "PromptSessionError",
    "PromptSurface",
    "Response",
    "ResponseKind",
    "RunResult",
    "ScriptRunner",
    "ScriptedEvents",
    "ScriptedSurface",
    "TerminalSurface",
    "VarBag",
    "Workflow",
    "load_action",
    "load_workflow",
    "play",
    "run_actions",
]
