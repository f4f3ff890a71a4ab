"""
Tests for the mixed-pairing policy.
"""

from doubles_scheduler.models import Gender, Player
from doubles_scheduler.services.gender_roles import effective_role, is_mixed_pair


def test_strong_female_counts_as_male(make_settings):
    settings = make_settings(strong_female_as_male=True, strong_level_threshold=7)

    assert effective_role(Player("a", "A", Gender.FEMALE, 7), settings) == Gender.MALE
    assert effective_role(Player("b", "B", Gender.FEMALE, 6), settings) == Gender.FEMALE
    assert effective_role(Player("c", "C", Gender.MALE, 2), settings) == Gender.MALE
    assert effective_role(Player("d", "D", Gender.OTHER, 8), settings) == Gender.OTHER


def test_rule_disabled_keeps_gender(make_settings):
    settings = make_settings(strong_female_as_male=False)

    assert effective_role(Player("a", "A", Gender.FEMALE, 8), settings) == Gender.FEMALE


def test_mixed_pair(make_settings):
    settings = make_settings(strong_level_threshold=7)
    man = Player("m", "M", Gender.MALE, 5)
    woman = Player("w", "W", Gender.FEMALE, 3)
    strong_woman = Player("s", "S", Gender.FEMALE, 8)

    assert is_mixed_pair(man, woman, settings)
    assert not is_mixed_pair(man, strong_woman, settings)
    assert is_mixed_pair(woman, strong_woman, settings)
