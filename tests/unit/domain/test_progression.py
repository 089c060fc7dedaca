from __future__ import annotations

import logging

import pytest

from app.domain.progression import apply_xp_award, xp_target
from app.schemas.records import UserStats


def test_target_scales_with_level():
    assert xp_target(1) == 1000
    assert xp_target(4) == 4000


def test_award_below_target_only_adds_xp():
    result = apply_xp_award(UserStats(xp=100, level=1), 80)

    assert result.stats.xp == 180
    assert result.stats.level == 1
    assert result.leveled_up is False
    assert result.awarded == 80


def test_award_crossing_target_levels_up_and_carries_remainder():
    result = apply_xp_award(UserStats(xp=950, level=1), 80)

    assert result.stats.level == 2
    assert result.stats.xp == 30
    assert result.leveled_up is True
    assert result.new_level == 2


def test_award_landing_exactly_on_target_levels_up():
    result = apply_xp_award(UserStats(xp=850, level=1), 150)

    assert result.stats.level == 2
    assert result.stats.xp == 0


def test_target_uses_level_before_the_award():
    result = apply_xp_award(UserStats(xp=1990, level=2), 150)

    assert result.stats.level == 3
    assert result.stats.xp == 140


@pytest.mark.parametrize("level", [1, 2, 5])
@pytest.mark.parametrize("amount", [0, 80, 150, 1000])
def test_xp_stays_below_target_for_awards_up_to_one_level(level, amount):
    start = UserStats(xp=xp_target(level) - 1, level=level)

    stats = apply_xp_award(start, amount).stats

    assert 0 <= stats.xp < xp_target(stats.level)


def test_input_stats_are_not_mutated():
    stats = UserStats(xp=950, level=1)

    apply_xp_award(stats, 80, last_action="Just scanned Fern")

    assert stats.xp == 950
    assert stats.level == 1
    assert stats.last_action == "Welcome to SmartGrow!"


def test_last_action_is_recorded():
    result = apply_xp_award(UserStats(), 80, last_action="Just scanned Fern")
    assert result.stats.last_action == "Just scanned Fern"


def test_oversized_award_levels_once_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="app.domain.progression"):
        result = apply_xp_award(UserStats(xp=0, level=1), 3500)

    assert result.stats.level == 2
    assert result.stats.xp == 2500
    assert "more than one level" in caplog.text


def test_negative_award_rejected():
    with pytest.raises(ValueError):
        apply_xp_award(UserStats(), -1)
