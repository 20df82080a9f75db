"""
Shop Titans - Core Constants
============================
Single source of truth for hero formula constants, enums, and socket tables.

Every string code that shows up in hero configurations (gear quality, element
grade, spirit tier, spirit name) is parsed into an enum here, and each enum has a
total lookup table. Anything that does not parse is a configuration error.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from .errors import ErrorKind, HeroConfigurationError


# =============================================================================
# HERO LAYOUT
# =============================================================================

EQUIPMENT_SLOT_COUNT = 6
SKILL_SLOT_COUNT = 4
INNATE_SKILL_COUNT = 4

# Empty slot / empty socket marker
EMPTY = ""

# Seeds
# NOTE: attack seeding reads the HP seed counter, matching the game's sheet.
ATTACK_PER_HP_SEED = 4
DEFENSE_PER_DEF_SEED = 4

# Affinity match multiplier for flat socket bonuses
AFFINITY_MULTIPLIER = 1.5

# Spirit counts are reported as 8-bit values; larger counts degrade to 0
SPIRIT_QTY_MAX = 255


# =============================================================================
# STAT TRIPLE
# =============================================================================

@dataclass(frozen=True)
class StatTriple:
    """Flat Attack / Defense / HP bonus."""
    atk: float = 0.0
    defense: float = 0.0
    hp: float = 0.0

    def scaled(self, factor: float) -> 'StatTriple':
        return StatTriple(self.atk * factor, self.defense * factor, self.hp * factor)

    def capped(self, ceiling: 'StatTriple') -> 'StatTriple':
        """Cap each dimension at the matching dimension of ``ceiling``."""
        return StatTriple(
            min(self.atk, ceiling.atk),
            min(self.defense, ceiling.defense),
            min(self.hp, ceiling.hp),
        )


ZERO_TRIPLE = StatTriple()


# =============================================================================
# GEAR QUALITY
# =============================================================================

class Quality(Enum):
    """Crafted item quality, lowest to highest."""
    NORMAL = "Normal"
    SUPERIOR = "Superior"
    FLAWLESS = "Flawless"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


QUALITY_MULTIPLIERS: Dict[Quality, float] = {
    Quality.NORMAL: 1.0,
    Quality.SUPERIOR: 1.25,
    Quality.FLAWLESS: 1.5,
    Quality.EPIC: 2.0,
    Quality.LEGENDARY: 3.0,
}


def quality_from_string(quality_str: str) -> Quality:
    """Convert a quality string (e.g. 'Epic') to a Quality."""
    try:
        return Quality(quality_str)
    except ValueError:
        raise HeroConfigurationError(
            ErrorKind.UNKNOWN_QUALITY, f"Unknown gear quality {quality_str!r}"
        ) from None


def get_quality_multiplier(quality: Quality) -> float:
    return QUALITY_MULTIPLIERS[quality]


# =============================================================================
# ELEMENTS
# =============================================================================

class ElementGrade(Enum):
    """Socketed element grade (1-4)."""
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


# Elemental investment points per matching socket
ELEMENT_GRADE_POINTS: Dict[ElementGrade, int] = {
    ElementGrade.ONE: 5,
    ElementGrade.TWO: 10,
    ElementGrade.THREE: 15,
    ElementGrade.FOUR: 25,
}

# Flat bonus granted to the item an element is socketed in
ELEMENT_SOCKET_BONUSES: Dict[ElementGrade, StatTriple] = {
    ElementGrade.ONE: StatTriple(14.0, 10.0, 3.0),
    ElementGrade.TWO: StatTriple(38.0, 25.0, 8.0),
    ElementGrade.THREE: StatTriple(48.0, 32.0, 10.0),
    ElementGrade.FOUR: StatTriple(89.0, 59.0, 18.0),
}

# Named elements that outclass their grade
ELEMENT_SPECIAL_SOCKET_BONUSES: Dict[Tuple[str, ElementGrade], StatTriple] = {
    ("Luxurious", ElementGrade.ONE): StatTriple(26.0, 18.0, 5.0),  # Tier 5 chest
    ("Opulent", ElementGrade.THREE): StatTriple(63.0, 42.0, 13.0),  # Tier 10 chest
}


# Canonical grade codes as written in descriptors
ELEMENT_GRADE_CODES: Dict[str, ElementGrade] = {
    "1": ElementGrade.ONE,
    "2": ElementGrade.TWO,
    "3": ElementGrade.THREE,
    "4": ElementGrade.FOUR,
}


def element_grade_from_string(grade_str: str) -> ElementGrade:
    """Convert a grade string ('1'-'4') to an ElementGrade."""
    grade = ELEMENT_GRADE_CODES.get(grade_str)
    if grade is None:
        raise HeroConfigurationError(
            ErrorKind.UNKNOWN_ELEMENT_GRADE, f"Unknown element grade {grade_str!r} (expected 1-4)"
        )
    return grade


def get_element_socket_bonus(element: str, grade: ElementGrade) -> StatTriple:
    """Flat bonus for an element socket, before affinity and caps."""
    return ELEMENT_SPECIAL_SOCKET_BONUSES.get((element, grade), ELEMENT_SOCKET_BONUSES[grade])


# =============================================================================
# SPIRITS
# =============================================================================

class SpiritTier(Enum):
    """Spirit tier codes as written in socket descriptors."""
    T4 = "T4"     # Low-tier spirits
    T5 = "T5"     # Xolotl
    T7 = "T7"     # Mid-tier spirits
    T9 = "T9"     # High-tier spirits
    TM = "TM"     # Mundra
    T11 = "T11"   # Quetzalcoatl
    T12 = "T12"   # Max-tier spirits


SPIRIT_TIER_BONUSES: Dict[SpiritTier, StatTriple] = {
    SpiritTier.T4: StatTriple(16.0, 11.0, 3.0),
    SpiritTier.T5: StatTriple(26.0, 18.0, 5.0),
    SpiritTier.T7: StatTriple(41.0, 27.0, 8.0),
    SpiritTier.T9: StatTriple(48.0, 32.0, 10.0),
    SpiritTier.TM: StatTriple(50.0, 33.0, 10.0),
    SpiritTier.T11: StatTriple(63.0, 42.0, 13.0),
    SpiritTier.T12: StatTriple(89.0, 59.0, 18.0),
}


def spirit_tier_from_string(tier_str: str) -> SpiritTier:
    """Convert a tier code ('T4', 'TM', ...) to a SpiritTier."""
    try:
        return SpiritTier(tier_str)
    except ValueError:
        raise HeroConfigurationError(
            ErrorKind.UNKNOWN_SPIRIT_TIER, f"Unknown spirit tier {tier_str!r}"
        ) from None


class SpiritName(Enum):
    """Spirits with a special effect on the hero."""
    WOLF = "Wolf"
    RAM = "Ram"
    EAGLE = "Eagle"
    OX = "Ox"
    VIPER = "Viper"
    CAT = "Cat"
    BEAR = "Bear"
    WALRUS = "Walrus"
    MAMMOTH = "Mammoth"
    LION = "Lion"
    TIGER = "Tiger"
    PHOENIX = "Phoenix"
    HYDRA = "Hydra"
    TARRASQUE = "Tarrasque"
    CARBUNCLE = "Carbuncle"
    CHIMERA = "Chimera"
    KRAKEN = "Kraken"


def spirit_name_from_string(name: str) -> Optional[SpiritName]:
    """Spirit name lookup. Spirits without a special effect return None."""
    try:
        return SpiritName(name)
    except ValueError:
        return None


@dataclass(frozen=True)
class SpiritEffect:
    """Hero-wide bonus granted by a socketed spirit. Percents are fractions."""
    atk_percent: float = 0.0
    atk_value: float = 0.0
    def_percent: float = 0.0
    def_value: float = 0.0
    hp_percent: float = 0.0
    hp_value: float = 0.0
    eva_percent: float = 0.0
    crit_chance_percent: float = 0.0
    crit_dmg_percent: float = 0.0

    def overlay(self, later: 'SpiritEffect') -> 'SpiritEffect':
        """
        Combine with the effect of a later slot.

        Effects do not stack: for each field, the last slot that grants a
        non-zero value sets it.
        """
        return SpiritEffect(**{
            f.name: getattr(later, f.name) or getattr(self, f.name) for f in fields(self)
        })


NO_SPIRIT_EFFECT = SpiritEffect()

# (on-affinity, off-affinity)
SPIRIT_EFFECTS: Dict[SpiritName, Tuple[SpiritEffect, SpiritEffect]] = {
    SpiritName.WOLF: (SpiritEffect(atk_percent=0.10), SpiritEffect(atk_percent=0.05)),
    SpiritName.RAM: (SpiritEffect(def_percent=0.10), SpiritEffect(def_percent=0.05)),
    SpiritName.EAGLE: (SpiritEffect(crit_chance_percent=0.03), SpiritEffect(crit_chance_percent=0.02)),
    SpiritName.OX: (SpiritEffect(hp_percent=0.05), SpiritEffect(hp_percent=0.03)),
    SpiritName.VIPER: (SpiritEffect(crit_dmg_percent=0.20), SpiritEffect(crit_dmg_percent=0.15)),
    SpiritName.CAT: (SpiritEffect(eva_percent=0.03), SpiritEffect(eva_percent=0.02)),
    SpiritName.BEAR: (
        SpiritEffect(atk_percent=0.07, hp_value=20.0),
        SpiritEffect(atk_percent=0.05, hp_value=15.0),
    ),
    SpiritName.WALRUS: (SpiritEffect(hp_percent=0.08), SpiritEffect(hp_percent=0.05)),
    SpiritName.MAMMOTH: (SpiritEffect(def_percent=0.13), SpiritEffect(def_percent=0.10)),
    SpiritName.LION: (
        SpiritEffect(atk_percent=0.07, eva_percent=0.02),
        SpiritEffect(atk_percent=0.05, eva_percent=0.01),
    ),
    SpiritName.TIGER: (
        SpiritEffect(def_percent=0.07, eva_percent=0.02),
        SpiritEffect(def_percent=0.05, eva_percent=0.01),
    ),
    SpiritName.PHOENIX: (SpiritEffect(hp_percent=0.05), SpiritEffect(hp_percent=0.04)),
    SpiritName.HYDRA: (
        SpiritEffect(def_value=125.0, hp_value=35.0),
        SpiritEffect(def_value=100.0, hp_value=25.0),
    ),
    SpiritName.TARRASQUE: (SpiritEffect(def_percent=0.25), SpiritEffect(def_percent=0.20)),
    SpiritName.CARBUNCLE: (
        SpiritEffect(crit_chance_percent=0.03, eva_percent=0.03),
        SpiritEffect(crit_chance_percent=0.02, eva_percent=0.02),
    ),
    SpiritName.CHIMERA: (
        SpiritEffect(atk_percent=0.15, crit_dmg_percent=0.15),
        SpiritEffect(atk_percent=0.10, crit_dmg_percent=0.10),
    ),
    SpiritName.KRAKEN: (
        SpiritEffect(atk_value=125.0, atk_percent=0.15),
        SpiritEffect(atk_value=100.0, atk_percent=0.10),
    ),
}


def get_spirit_effect(name: str, on_affinity: bool) -> SpiritEffect:
    """Special effect of a spirit by name; unrecognised spirits grant nothing."""
    spirit = spirit_name_from_string(name)
    if spirit is None:
        return NO_SPIRIT_EFFECT
    on, off = SPIRIT_EFFECTS[spirit]
    return on if on_affinity else off


# Socketed spirits whose counts are handed to the trial executor
TRACKED_SIM_SPIRITS: List[str] = [
    "Armadillo T7",
    "Lizard T7",
    "Shark T9",
    "Dinosaur T9",
    "Mundra TM",
]


# =============================================================================
# CLASS CONDITIONAL BONUSES
# =============================================================================

# Classes that add their elemental investment to attack (20 points -> +20%)
ELEMENT_QTY_ATTACK_CLASSES: FrozenSet[str] = frozenset({"Geomancer", "Astramancer"})

# Classes that add a fraction of their threat rating to attack
THREAT_ATTACK_CLASSES: Dict[str, float] = {
    "Chieftain": 0.4,
}


__all__ = [
    'EQUIPMENT_SLOT_COUNT',
    'SKILL_SLOT_COUNT',
    'INNATE_SKILL_COUNT',
    'EMPTY',
    'ATTACK_PER_HP_SEED',
    'DEFENSE_PER_DEF_SEED',
    'AFFINITY_MULTIPLIER',
    'SPIRIT_QTY_MAX',
    'StatTriple',
    'ZERO_TRIPLE',
    'Quality',
    'QUALITY_MULTIPLIERS',
    'quality_from_string',
    'get_quality_multiplier',
    'ElementGrade',
    'ELEMENT_GRADE_POINTS',
    'ELEMENT_SOCKET_BONUSES',
    'ELEMENT_SPECIAL_SOCKET_BONUSES',
    'ELEMENT_GRADE_CODES',
    'element_grade_from_string',
    'get_element_socket_bonus',
    'SpiritTier',
    'SPIRIT_TIER_BONUSES',
    'spirit_tier_from_string',
    'SpiritName',
    'spirit_name_from_string',
    'SpiritEffect',
    'NO_SPIRIT_EFFECT',
    'SPIRIT_EFFECTS',
    'get_spirit_effect',
    'TRACKED_SIM_SPIRITS',
    'ELEMENT_QTY_ATTACK_CLASSES',
    'THREAT_ATTACK_CLASSES',
]
