"""
Core package: action/interaction models, the interaction player,
prompt surfaces and the reference engine.

Consumers may import submodules directly, e.g.:
  from interactive_actions.core.models import Interaction, load_workflow
  from interactive_actions.core.player import play
  from interactive_actions.core.engine import Engine
"""

__all__: list[str] = []
