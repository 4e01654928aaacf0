"""
Spin Party - Party game session engine.

Players take turns via a spinning-wheel selector and answer prompts
drawn from question decks. The package provides:
- Validated value types for players, questions and decks
- An immutable session state machine with question rotation
- In-memory deck storage and session management
- A REST API and CLI on top
"""

__version__ = "0.1.0"
