# interactive_actions/core/engine.py
from __future__ import annotations

"""Action engine
----------------
Reference orchestrator: walks a sequence of actions, plays each interaction
through the player, hands scripts to a run collaborator, and applies the
continuation policy (`break_if_cancel`, `ignore_exit`, `hook`).
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol, Union

from interactive_actions.core.errors import EngineError
from interactive_actions.core.models import (
    Action,
    ActionHook,
    ActionResult,
    Response,
    RunResult,
    VarBag,
    Workflow,
)
from interactive_actions.core.player import play
from interactive_actions.core.prompting import PromptSurface, ScriptedEvents, surface_for
from interactive_actions.utils.logger import bind, get_logger, log_with_context, unbind
from interactive_actions.utils.timing import Stopwatch


class ScriptRunner(Protocol):
    """Executes script text and reports its outcome."""

    def run(self, script: str, *, capture: bool, varbag: VarBag) -> RunResult:
        """Run `script`; capture output into the result when `capture`, else stream it."""


def _run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


class Engine:
    """Runs actions one at a time, sharing a single variable bag across the run."""

    def __init__(self, runner: Optional[ScriptRunner] = None):
        self.runner = runner
        self.log = get_logger(__name__)

    def run(
        self,
        actions: Union[Workflow, Iterable[Action]],
        varbag: Optional[VarBag] = None,
        events: Optional[ScriptedEvents] = None,
        surface: Optional[PromptSurface] = None,
        hook: Optional[ActionHook | str] = None,
    ) -> list[ActionResult]:
        """
        Execute `actions` in order and return one result per executed action.

        With `hook`, only actions of that phase run. The interaction is played
        before the script so captured values are visible to it. Processing stops
        after a canceled prompt when `break_if_cancel`, and after a non-zero exit
        code unless `ignore_exit`; the stopping action's result is kept.
        """
        items = actions.actions if isinstance(actions, Workflow) else list(actions)
        if hook is not None:
            phase = ActionHook(hook)
            items = [a for a in items if a.hook is phase]

        bag: VarBag = varbag if varbag is not None else {}
        if surface is None and events is not None:
            surface = surface_for(events)

        results: list[ActionResult] = []
        bind(run_id=_run_id())
        try:
            for action in items:
                result, stop = self._run_action(action, bag, surface)
                results.append(result)
                if stop:
                    break
        finally:
            unbind("run_id")

        self.log.info(f"Ran {len(results)}/{len(items)} action(s)")
        return results

    def _run_action(
        self,
        action: Action,
        varbag: VarBag,
        surface: Optional[PromptSurface],
    ) -> tuple[ActionResult, bool]:
        log = log_with_context(self.log, action=action.name)

        with Stopwatch() as sw:
            response = Response.none()
            if action.interaction is not None:
                response = play(action.interaction, varbag=varbag, surface=surface)
                if response.is_cancel and action.break_if_cancel:
                    log.info(f"Action '{action.name}' canceled; stopping")
                    return ActionResult(name=action.name, response=response), True

            run_result: Optional[RunResult] = None
            if action.run is not None:
                if self.runner is None:
                    raise EngineError(f"Action '{action.name}' has a script but no runner is configured")
                run_result = self.runner.run(action.run, capture=action.capture, varbag=varbag)

        log.debug(f"Action '{action.name}' took {sw.human()}")
        result = ActionResult(name=action.name, run=run_result, response=response)

        if run_result is not None and not run_result.ok:
            if action.ignore_exit:
                log.warning(f"Action '{action.name}' exited with {run_result.code}; ignoring")
            else:
                log.error(f"Action '{action.name}' exited with {run_result.code}; stopping")
                return result, True
        return result, False


def run_actions(
    actions: Union[Workflow, Iterable[Action]],
    runner: Optional[ScriptRunner] = None,
    varbag: Optional[VarBag] = None,
    events: Optional[ScriptedEvents] = None,
    surface: Optional[PromptSurface] = None,
    hook: Optional[ActionHook | str] = None,
) -> list[ActionResult]:
    """Run actions on a fresh Engine."""
    return Engine(runner=runner).run(actions, varbag=varbag, events=events, surface=surface, hook=hook)


__all__ = ["ScriptRunner", "Engine", "run_actions"]
