"""
Mixed-pairing policy.

A strong female player (level at or above the configured threshold) may count
as male when deciding whether a team is mixed. Kept free of scheduler state so
the rule can be changed or tested on its own.
"""

from doubles_scheduler.models import Gender, Player, Settings


def effective_role(player: Player, settings: Settings) -> Gender:
    if (settings.strong_female_as_male
            and player.gender == Gender.FEMALE
            and player.level >= settings.strong_level_threshold):
        return Gender.MALE
    return player.gender


def is_mixed_pair(a: Player, b: Player, settings: Settings) -> bool:
    return effective_role(a, settings) != effective_role(b, settings)
