"""
Player - A participant in a party game session.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import uuid

from .text import is_blank, sanitize_text


def new_id() -> str:
    """Generate a fresh identifier for content entities and sessions."""
    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class Player:
    """
    A player in the game.

    Identity is the player_id: two players with the same id are the
    same player even if their names differ.
    """
    name: str
    player_id: str = field(default_factory=new_id)
    is_active: bool = True

    def __hash__(self):
        return hash(self.player_id)

    def __eq__(self, other):
        if not isinstance(other, Player):
            return False
        return self.player_id == other.player_id

    def is_valid(self) -> bool:
        """A player needs a non-blank name."""
        return not is_blank(self.name)

    def sanitized_name(self) -> str:
        return sanitize_text(self.name)

    def renamed(self, name: str) -> Player:
        """Return a copy with a new display name, keeping the identity."""
        return replace(self, name=name)
