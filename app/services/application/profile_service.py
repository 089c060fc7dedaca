"""
Profile Service

Cosmetic profile state kept on UserStats: persona, theme, names and the
"last action" line shown on the dashboard.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from app.domain.exceptions import ValidationError
from app.domain.personas import parse_persona, parse_theme, persona_label
from app.enums.common import Language
from app.schemas.records import UserStats

if TYPE_CHECKING:
    from infrastructure.database.repositories.persistence_store import PersistenceStore

logger = logging.getLogger(__name__)


def display_name(stats: UserStats) -> str:
    """Full name (or username) with each word capitalized."""
    name = stats.full_name or stats.username
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))


def xp_progress(stats: UserStats) -> float:
    """Percent of the way to the next level, capped at 100."""
    return min(100.0, stats.xp / stats.xp_target * 100.0)


class ProfileService:
    """Reads and updates the acting user's profile."""

    def __init__(self, store: "PersistenceStore"):
        self.store = store

    def get_stats(self) -> UserStats:
        return self.store.get_stats()

    def _update(self, **changes: Any) -> UserStats:
        stats = self.store.get_stats()
        for name, value in changes.items():
            setattr(stats, name, value)
        self.store.save_stats(stats)
        return stats

    def set_persona(self, persona: object) -> UserStats:
        """Switch profile icon; unknown persona keys raise ValidationError."""
        chosen = parse_persona(persona)
        logger.info("Persona changed to %s", chosen)
        return self._update(profile_icon=chosen, last_action=f"Became {persona_label(chosen)}")

    def set_theme(self, theme: object) -> UserStats:
        chosen = parse_theme(theme)
        return self._update(theme_color=chosen, last_action=f"Changed theme to {chosen}")

    def set_language(self, language: object) -> UserStats:
        """Language itself lives on the client; only the activity line is recorded."""
        try:
            chosen = Language(language)
        except ValueError:
            raise ValidationError(f"Unsupported language: {language!r}") from None
        return self.record_activity(f"Changed language to {chosen.display_name}")

    def update_profile(self, username: Optional[str] = None, full_name: Optional[str] = None) -> UserStats:
        changes: Dict[str, Any] = {}
        if username is not None:
            cleaned = username.strip()
            if not cleaned:
                raise ValidationError("Username cannot be empty")
            changes["username"] = cleaned
        if full_name is not None:
            changes["full_name"] = full_name.strip() or None
        if not changes:
            return self.store.get_stats()
        return self._update(**changes)

    def record_activity(self, text: str) -> UserStats:
        """Set the dashboard's "last action" line, e.g. ``Reviewed analytics``."""
        if not text or not text.strip():
            raise ValidationError("Activity text cannot be empty")
        return self._update(last_action=text.strip())

    def profile_view(self) -> Dict[str, Any]:
        stats = self.store.get_stats()
        return {
            **stats.to_storage(),
            "displayName": display_name(stats),
            "personaLabel": persona_label(stats.profile_icon),
            "xpTarget": stats.xp_target,
            "xpProgress": round(xp_progress(stats), 1),
        }
