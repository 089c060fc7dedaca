"""
Progression Rules
=================
XP awards and level-up normalization for UserStats.

The level target is ``level * 1000`` computed from the level held *before*
an award. Normalization is a single step: one award produces at most one
level-up. With the fixed award sizes (80 and 150 XP) that is always
enough; larger awards would leave ``xp`` above the next target, which is
logged rather than corrected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.constants import Progression
from app.schemas.records import UserStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwardResult:
    """Outcome of one XP award."""

    stats: UserStats
    awarded: int
    leveled_up: bool

    @property
    def new_level(self) -> int:
        return self.stats.level


def xp_target(level: int) -> int:
    """XP needed to leave *level*."""
    return level * Progression.XP_PER_LEVEL


def apply_xp_award(stats: UserStats, amount: int, *, last_action: str | None = None) -> AwardResult:
    """
    Return a copy of *stats* with *amount* XP added and levels normalized.

    Args:
        stats: Current stats (not mutated)
        amount: Non-negative XP to award
        last_action: Optional activity text recorded with the award

    Returns:
        AwardResult with the updated stats copy
    """
    if amount < 0:
        raise ValueError("XP award must be non-negative")

    target = xp_target(stats.level)
    updated = stats.model_copy(deep=True)
    updated.xp = stats.xp + amount
    if last_action is not None:
        updated.last_action = last_action

    leveled_up = False
    if updated.xp >= target:
        updated.level += 1
        updated.xp -= target
        leveled_up = True
        logger.info("Level up: %s -> %s", stats.level, updated.level)

    if updated.xp >= xp_target(updated.level):
        logger.warning(
            "XP award of %s crossed more than one level; xp=%s remains above target %s",
            amount,
            updated.xp,
            xp_target(updated.level),
        )

    return AwardResult(stats=updated, awarded=amount, leveled_up=leveled_up)
