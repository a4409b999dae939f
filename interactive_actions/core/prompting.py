# interactive_actions/core/prompting.py
from __future__ import annotations

"""Prompt surfaces
------------------
Renders one question and returns the raw answer. Two surfaces share the same
questionary prompts: the live terminal, and a scripted one that feeds key
events through a prompt_toolkit pipe into a fixed-size virtual screen.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Protocol, runtime_checkable

import questionary
from prompt_toolkit.data_structures import Size
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from interactive_actions.core.errors import InvalidInteractionConfig, PromptSessionError
from interactive_actions.core.models import InteractionKind
from interactive_actions.utils.config import get_settings
from interactive_actions.utils.logger import get_logger

__all__ = [
    "QuestionSpec",
    "PromptSurface",
    "TerminalSurface",
    "ScriptedSurface",
    "ScriptedEvents",
    "KeyInputs",
    "build_prompt",
    "surface_for",
]

SCRIPTED_WIDTH = 50
SCRIPTED_HEIGHT = 20


@dataclass(frozen=True)
class QuestionSpec:
    """A renderable question built from an Interaction."""
    name: str
    kind: InteractionKind
    message: str
    choices: list[str] = field(default_factory=list)
    default: Any = None
    default_index: Optional[int] = None
    ask_if_answered: bool = False


class KeyInputs:
    """Raw terminal sequences for the keys scripted prompts need."""
    ENTER = "\r"
    UP = "\x1b[A"
    DOWN = "\x1b[B"
    BACK = "\x7f"
    TAB = "\t"
    CTRL_C = "\x03"

    SUBMIT = (ENTER, CTRL_C)


class ScriptedEvents:
    """
    A finite FIFO of key events driving scripted prompts.

    Each prompt consumes keys up to and including the first submit (Enter) or
    abort (Ctrl-C) key. Whatever follows stays queued for the next prompt.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: deque[str] = deque(keys)

    def type_text(self, text: str) -> "ScriptedEvents":
        """Queue every character of `text` as its own key event."""
        self._keys.extend(text)
        return self

    def press(self, *keys: str) -> "ScriptedEvents":
        self._keys.extend(keys)
        return self

    def answer(self, text: str) -> "ScriptedEvents":
        """Type `text` and submit it."""
        return self.type_text(text).press(KeyInputs.ENTER)

    def take_prompt(self) -> str:
        """Pop the keys for one prompt, joined into the raw byte stream."""
        taken: list[str] = []
        while self._keys:
            key = self._keys.popleft()
            taken.append(key)
            if key in KeyInputs.SUBMIT:
                break
        return "".join(taken)

    @property
    def exhausted(self) -> bool:
        return not self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"ScriptedEvents({list(self._keys)!r})"


@runtime_checkable
class PromptSurface(Protocol):
    """Renders one question; returns the raw answer, or None when the user aborted."""

    def render(self, question: QuestionSpec) -> Any:
        ...


# ------------- questionary wiring -------------


def build_prompt(question: QuestionSpec, **io: Any) -> questionary.Question:
    """Create the questionary prompt for `question`; `io` carries input/output overrides."""
    settings = get_settings()
    common = dict(qmark=settings.PROMPT_QMARK, **io)
    if not settings.PROMPT_INSTRUCTIONS:
        common["instruction"] = ""
    default = question.default if question.ask_if_answered else None

    if question.kind is InteractionKind.input:
        return questionary.text(question.message, default=default or "", **common)

    if question.kind is InteractionKind.select:
        if not question.choices:
            raise InvalidInteractionConfig(f"select question {question.message!r} has no options")
        # Values are option indices so repeated labels stay distinguishable.
        choices = [questionary.Choice(title=label, value=i) for i, label in enumerate(question.choices)]
        start = None
        if question.ask_if_answered and question.default_index is not None:
            start = choices[question.default_index]
        return questionary.select(question.message, choices=choices, default=start, **common)

    # Enter is required after y/n so every prompt is submitted the same way.
    # Without a configured default, a bare Enter declines.
    return questionary.confirm(
        question.message,
        default=False if default is None else bool(default),
        auto_enter=False,
        **common,
    )


def _raw_answer(question: QuestionSpec, answer: Any) -> Any:
    """Select prompts answer with an option index; surfaces hand back its label."""
    if question.kind is InteractionKind.select and isinstance(answer, int) and not isinstance(answer, bool):
        return question.choices[answer]
    return answer


# ------------- Surfaces -------------


class TerminalSurface:
    """Asks on the real terminal."""

    def __init__(self) -> None:
        self.log = get_logger(__name__)

    def render(self, question: QuestionSpec) -> Any:
        prompt = build_prompt(question)
        try:
            return _raw_answer(question, prompt.unsafe_ask())
        except KeyboardInterrupt:
            self.log.debug(f"Prompt {question.name!r} aborted by user")
            return None
        except (OSError, EOFError) as exc:
            raise PromptSessionError(f"Terminal prompt failed: {exc}") from exc


class _FixedSizeOutput(DummyOutput):
    """Dummy output reporting a fixed virtual screen size."""

    def __init__(self, width: int, height: int) -> None:
        self._size = Size(rows=height, columns=width)

    def get_size(self) -> Size:
        return self._size


class ScriptedSurface:
    """Answers prompts from a ScriptedEvents queue on a virtual screen."""

    def __init__(
        self,
        events: ScriptedEvents,
        width: int = SCRIPTED_WIDTH,
        height: int = SCRIPTED_HEIGHT,
    ) -> None:
        self.events = events
        self.width = width
        self.height = height
        self.log = get_logger(__name__)

    def render(self, question: QuestionSpec) -> Any:
        keys = self.events.take_prompt()
        self.log.debug(f"Scripted prompt {question.name!r} fed {len(keys)} char(s)")
        with create_pipe_input() as pipe:
            if keys:
                pipe.send_text(keys)
            # Closing the write end turns an unanswered prompt into EOFError.
            pipe.close()
            prompt = build_prompt(
                question,
                input=pipe,
                output=_FixedSizeOutput(self.width, self.height),
            )
            try:
                return _raw_answer(question, prompt.unsafe_ask())
            except KeyboardInterrupt:
                return None
            except EOFError as exc:
                raise PromptSessionError(
                    f"Scripted events exhausted before {question.kind.value} prompt "
                    f"{question.message!r} was answered"
                ) from exc


def surface_for(events: Optional[ScriptedEvents] = None) -> PromptSurface:
    """Scripted surface when events are given, else the live terminal."""
    if events is not None:
        return ScriptedSurface(events)
    return TerminalSurface()
