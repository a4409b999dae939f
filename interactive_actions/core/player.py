# interactive_actions/core/player.py
from __future__ import annotations

"""Interaction player
---------------------
Turns one declarative Interaction into a question, resolves its default answer,
drives the prompt on a surface and normalizes the raw answer into a Response,
capturing it into the caller's variable bag when requested.
"""

from typing import Any, Optional

from interactive_actions.core.errors import InvalidInteractionConfig
from interactive_actions.core.models import (
    Interaction,
    InteractionKind,
    Response,
    VarBag,
)
from interactive_actions.core.prompting import (
    PromptSurface,
    QuestionSpec,
    ScriptedEvents,
    surface_for,
)
from interactive_actions.utils.logger import get_logger

# Public API
__all__ = ["play", "to_question", "to_default_answer", "normalize_answer"]

QUESTION_NAME = "question"


def to_question(interaction: Interaction) -> QuestionSpec:
    """Build the renderable question. Select without options yields no choices."""
    return QuestionSpec(
        name=QUESTION_NAME,
        kind=interaction.kind,
        message=interaction.prompt,
        choices=list(interaction.options or []),
        default=to_default_answer(interaction),
        default_index=interaction.default_value if interaction.kind is InteractionKind.select else None,
        ask_if_answered=interaction.ask_if_has_default is True,
    )


def to_default_answer(interaction: Interaction) -> Any:
    """
    Raw answer equivalent to the configured default, or None without one.

    Select defaults are option indices and resolve to the option label.

    Raises:
        InvalidInteractionConfig when a select default has no option to point at.
    """
    default = interaction.default_value
    if default is None:
        return None

    if interaction.kind is InteractionKind.select:
        options = interaction.options or []
        if isinstance(default, bool) or not isinstance(default, int):
            raise InvalidInteractionConfig(
                f"select default must be an option index, got {default!r}"
            )
        if not 0 <= default < len(options):
            raise InvalidInteractionConfig(
                f"select default index {default} is out of range for {len(options)} option(s)"
            )
        return options[default]

    if interaction.kind is InteractionKind.confirm:
        return bool(default)
    return str(default)


def normalize_answer(raw: Any) -> Response:
    """
    Map a raw prompt answer to a Response.

    Text and selected labels become Text; a True confirmation becomes
    Text("true"). A False confirmation, an aborted prompt (None) and any other
    shape all become Cancel.
    """
    if raw is None:
        return Response.cancel()
    if isinstance(raw, bool):
        # false-confirm is reported as Cancel; callers rely on this.
        return Response.text("true") if raw else Response.cancel()
    if isinstance(raw, str):
        return Response.text(raw)
    return Response.cancel()


def update_varbag(interaction: Interaction, value: str, varbag: Optional[VarBag]) -> None:
    if varbag is None or interaction.out is None:
        return
    varbag[interaction.out] = value


def play(
    interaction: Interaction,
    varbag: Optional[VarBag] = None,
    events: Optional[ScriptedEvents] = None,
    surface: Optional[PromptSurface] = None,
) -> Response:
    """
    Play one interaction and return its normalized Response.

    A question with a default answer is skipped (and consumes no events) unless
    `ask_if_has_default` is true, in which case the default pre-fills the prompt.
    `surface` wins over `events`; with neither, the real terminal is used.

    Raises:
        InvalidInteractionConfig: the interaction cannot be rendered as configured.
        PromptSessionError: the prompt could not be driven to completion.
    """
    log = get_logger(__name__)
    question = to_question(interaction)

    if question.default is not None and not question.ask_if_answered:
        log.debug(f"Using default answer for {interaction.kind.value} prompt {interaction.prompt!r}")
        raw = question.default
    else:
        if question.kind is InteractionKind.select and not question.choices:
            raise InvalidInteractionConfig(f"select prompt {interaction.prompt!r} has no options")
        if surface is None:
            surface = surface_for(events)
        raw = surface.render(question)

    response = normalize_answer(raw)
    log.debug(f"{interaction.kind.value} prompt {interaction.prompt!r} -> {response.kind.value}")

    if response.is_text:
        update_varbag(interaction, response.value, varbag)
    return response
