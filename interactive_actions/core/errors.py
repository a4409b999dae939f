# interactive_actions/core/errors.py
"""Exception types raised by the action/interaction core.

User-driven outcomes (cancel, unsupported answer shapes) are never errors;
they come back as ``Response.cancel()``.
"""

from __future__ import annotations

__all__ = [
    "InteractiveActionsError",
    "InvalidInteractionConfig",
    "InvalidActionConfig",
    "PromptSessionError",
    "EngineError",
]


class InteractiveActionsError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInteractionConfig(InteractiveActionsError, ValueError):
    """An interaction cannot be played as configured (e.g. select default out of range)."""


class InvalidActionConfig(InteractiveActionsError, ValueError):
    """Already-parsed action data failed validation."""


class PromptSessionError(InteractiveActionsError):
    """The prompt session could not be driven to completion."""


class EngineError(InteractiveActionsError):
    """The orchestrator cannot execute an action with its current collaborators."""
