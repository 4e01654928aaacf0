"""
Engine Core - The session state machine and question rotation.

The engine is a synchronous value transformer:
1. A caller holds a GameState snapshot
2. It applies a transition (method call or Transition via the reducer)
3. It receives a new snapshot and stores/displays it

No I/O, no threads, no shared mutable state.
"""

from .state import GameState, GamePhase, DEFAULT_STALE_SECONDS, MIN_PLAYERS
from .transition import Transition, TransitionType, TransitionResult
from .reducer import apply_transition, apply_all

__all__ = [
    "GameState",
    "GamePhase",
    "DEFAULT_STALE_SECONDS",
    "MIN_PLAYERS",
    "Transition",
    "TransitionType",
    "TransitionResult",
    "apply_transition",
    "apply_all",
]
