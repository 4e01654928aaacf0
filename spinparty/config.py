"""Environment-level configuration for spinparty.

Keeps deployment-dependent values (environment name, CORS origins,
content denylist, stale-session threshold) out of the pure game logic.
"""

import os
from dataclasses import dataclass, field

from .content.text import DEFAULT_DENYLIST
from .engine_core.state import DEFAULT_STALE_SECONDS


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Environment / deployment settings."""

    env: str = "development"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    denylist: tuple[str, ...] = DEFAULT_DENYLIST
    stale_seconds: float = DEFAULT_STALE_SECONDS
    seed_default_decks: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        denylist = _split_csv(os.getenv("SPINPARTY_DENYLIST"))
        stale = os.getenv("SPINPARTY_STALE_SECONDS")
        return cls(
            env=os.getenv("SPINPARTY_ENV", "development"),
            allowed_origins=_split_csv(os.getenv("ALLOWED_ORIGINS", "*")) or ["*"],
            denylist=tuple(denylist) if denylist else DEFAULT_DENYLIST,
            stale_seconds=float(stale) if stale else DEFAULT_STALE_SECONDS,
            seed_default_decks=_as_bool(os.getenv("SPINPARTY_SEED_DEFAULTS"), True),
        )


def get_settings() -> Settings:
    """Convenience accessor for environment settings."""
    return Settings.from_env()
