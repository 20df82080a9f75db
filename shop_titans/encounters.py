"""
Shop Titans - Encounter Tiers
=============================
Encounter difficulty presets that studies climb through, and a lightweight
stochastic trial executor for running studies without the full quest simulator.

Studies take an ordered list of tiers, easiest first. A tier only needs to be
something the trial executor understands; ``EncounterTier`` is the shape the
bundled ``StatCheckTrial`` expects.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .hero_builder import SimHero


class EncounterDifficulty(Enum):
    """Quest difficulty tiers, easiest first."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"
    BOSS = "boss"


@dataclass(frozen=True)
class EncounterTier:
    """Enemy party a team is tested against."""
    name: str
    enemy_hp: float
    enemy_atk: float
    enemy_def: float = 0.0
    enemy_eva: float = 0.0
    description: str = ""


# Enemy stats per difficulty
# - enemy_hp: Combined HP the team must burn through
# - enemy_atk: Damage per enemy round before defense
# - enemy_def: Flat reduction applied to each hero's attack
# - enemy_eva: Chance an attack misses
ENCOUNTER_TIERS: Dict[EncounterDifficulty, EncounterTier] = {
    EncounterDifficulty.EASY: EncounterTier(
        name="easy",
        enemy_hp=1200.0,
        enemy_atk=150.0,
        enemy_def=20.0,
        description="Easy quest (single champion-less party)",
    ),
    EncounterDifficulty.MEDIUM: EncounterTier(
        name="medium",
        enemy_hp=3000.0,
        enemy_atk=320.0,
        enemy_def=60.0,
        enemy_eva=0.05,
        description="Medium quest",
    ),
    EncounterDifficulty.HARD: EncounterTier(
        name="hard",
        enemy_hp=7000.0,
        enemy_atk=650.0,
        enemy_def=140.0,
        enemy_eva=0.10,
        description="Hard quest",
    ),
    EncounterDifficulty.EXTREME: EncounterTier(
        name="extreme",
        enemy_hp=15000.0,
        enemy_atk=1200.0,
        enemy_def=260.0,
        enemy_eva=0.15,
        description="Extreme quest",
    ),
    EncounterDifficulty.BOSS: EncounterTier(
        name="boss",
        enemy_hp=30000.0,
        enemy_atk=2200.0,
        enemy_def=400.0,
        enemy_eva=0.20,
        description="Boss quest (minibosses on)",
    ),
}


def get_difficulty_from_string(difficulty_str: str) -> EncounterDifficulty:
    """Convert a difficulty string (e.g. 'hard') to EncounterDifficulty."""
    try:
        return EncounterDifficulty(difficulty_str.lower())
    except ValueError:
        raise ValueError(f"Unknown encounter difficulty {difficulty_str!r}") from None


def get_tier_sequence(names: Optional[Sequence[str]] = None) -> List[EncounterTier]:
    """
    Ordered tiers for a study.

    Args:
        names: Difficulty names, easiest first. Defaults to every preset.
    """
    if names is None:
        return list(ENCOUNTER_TIERS.values())
    return [ENCOUNTER_TIERS[get_difficulty_from_string(n)] for n in names]


# =============================================================================
# STAT CHECK TRIAL
# =============================================================================

MAX_ROUNDS = 50


class StatCheckTrial:
    """
    Trial executor that fights an encounter in whole rounds.

    Each round every hero attacks once (evasion and crits rolled per attack) and
    the enemy hits one random living hero (that hero's evasion rolled). The team
    wins if enemy HP reaches 0 within MAX_ROUNDS. Returns True on a win.

    Pass ``seed`` for reproducible studies. One generator serves every call,
    so a seed only reproduces results when variations are scored sequentially
    (``max_workers`` unset).
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def __call__(self, team: List[SimHero], tier: EncounterTier) -> bool:
        rng = self.rng
        enemy_hp = tier.enemy_hp
        # Indexed by team position; identifiers may repeat
        hero_hp = [h.hp for h in team]

        for _ in range(MAX_ROUNDS):
            for i, hero in enumerate(team):
                if hero_hp[i] <= 0:
                    continue
                if rng.random() < tier.enemy_eva:
                    continue
                damage = max(hero.atk - tier.enemy_def, hero.atk * 0.1)
                if rng.random() < hero.crit_chance:
                    damage *= hero.crit_mult
                enemy_hp -= damage
            if enemy_hp <= 0:
                return True

            alive = [i for i, hp in enumerate(hero_hp) if hp > 0]
            if not alive:
                return False
            target_index = rng.choice(alive)
            target = team[target_index]
            if rng.random() >= target.eva:
                hit = max(tier.enemy_atk - target.defense, tier.enemy_atk * 0.1)
                hero_hp[target_index] -= hit

        return False


__all__ = [
    'EncounterDifficulty',
    'EncounterTier',
    'ENCOUNTER_TIERS',
    'get_difficulty_from_string',
    'get_tier_sequence',
    'StatCheckTrial',
    'MAX_ROUNDS',
]
