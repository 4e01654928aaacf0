"""
Session Module - Manages running party game sessions.

A session represents one play-through:
- Created when players pick a deck and start
- Holds the current GameState snapshot
- Applies transitions one at a time
- Destroyed when the game ends or goes stale
"""

from .manager import SessionManager, Session, SessionNotFoundError, DrawResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionNotFoundError",
    "DrawResult",
]
