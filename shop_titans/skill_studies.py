"""
Shop Titans - Skill Study Variations
====================================
Variation generators for skill studies.

- single_hero_skill_variations: every 4-skill loadout from a pool for one hero
- static_duo_skill_variations: same, with a fixed (static) partner hero

Skill families are respected: a loadout never holds two tiers of the same skill.
"""

import copy
from itertools import combinations
from typing import Iterator, List, Optional, Sequence

from .core.constants import SKILL_SLOT_COUNT
from .game_data import GameData
from .hero_builder import Hero
from .studies import Variation


def _skill_loadouts(skill_pool: Sequence[str], fixed_skills: Sequence[str],
                    game_data: Optional[GameData]) -> Iterator[List[str]]:
    open_slots = SKILL_SLOT_COUNT - len(fixed_skills)
    if open_slots < 0:
        raise ValueError(f"At most {SKILL_SLOT_COUNT} fixed skills allowed, got {len(fixed_skills)}")

    pool = [s for s in skill_pool if s not in fixed_skills]
    families = game_data.hero_skill_tier_1_names if game_data is not None else {}

    for combo in combinations(pool, open_slots):
        loadout = list(fixed_skills) + list(combo)
        loadout_families = [families.get(s, s) for s in loadout]
        if len(set(loadout_families)) != len(loadout_families):
            continue
        yield loadout


def single_hero_skill_variations(hero: Hero, skill_pool: Sequence[str],
                                 fixed_skills: Sequence[str] = (),
                                 game_data: Optional[GameData] = None) -> List[Variation]:
    """
    One variation per skill loadout for ``hero``.

    Args:
        hero: Base configuration; its skills are replaced per variation
        skill_pool: Candidate skill names
        fixed_skills: Skills every loadout keeps
        game_data: When given, loadouts with two skills of one family are skipped
    """
    variations = []
    for loadout in _skill_loadouts(skill_pool, fixed_skills, game_data):
        variant = copy.deepcopy(hero)
        variant.skills = loadout
        variations.append(Variation(
            identifier=f"{hero.identifier}[{', '.join(loadout)}]",
            heroes=[variant],
            description=f"{hero.hero_class} with {', '.join(loadout)}",
        ))
    return variations


def static_duo_skill_variations(hero: Hero, partner: Hero, skill_pool: Sequence[str],
                                fixed_skills: Sequence[str] = (),
                                game_data: Optional[GameData] = None) -> List[Variation]:
    """Skill loadouts for ``hero`` fighting alongside an unchanging ``partner``."""
    variations = []
    for single in single_hero_skill_variations(hero, skill_pool, fixed_skills, game_data):
        single.heroes.append(copy.deepcopy(partner))
        single.description += f" + {partner.identifier}"
        variations.append(single)
    return variations


__all__ = [
    'single_hero_skill_variations',
    'static_duo_skill_variations',
]
