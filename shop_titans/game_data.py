"""
Shop Titans - Static Game Data
==============================
Read-only lookup tables for hero classes, equipment blueprints, hero skills and
innate skills.

Tables are loaded once (see ``load_game_data``) into a frozen ``GameData`` bundle
that every resolution call shares by reference. Nothing in this module mutates a
table after construction.

All percent fields are fractions (0.1 = +10%).
"""

import json
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from .core.constants import EQUIPMENT_SLOT_COUNT, INNATE_SKILL_COUNT, StatTriple
from .core.errors import ErrorKind, HeroConfigurationError

# Bundled demo data
DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
SAMPLE_GAME_DATA_PATH = os.path.join(DATA_DIR, "sample_game_data.json")


# =============================================================================
# DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class HeroClass:
    """A hero archetype: base stat curves, allowed equipment, innate skills."""
    name: str
    prerequisite: str
    gold_hire_cost: int
    gem_hire_cost: int

    # One entry per level, index = level - 1
    base_hp: Tuple[float, ...]
    base_atk: Tuple[float, ...]
    base_def: Tuple[float, ...]
    base_eva: float
    base_crit_chance: float
    base_crit_mult: float
    base_threat_rating: int

    element_type: str
    # Allowed blueprint types per slot; slot index is significant
    equipment_allowed: Tuple[Tuple[str, ...], ...]
    innate_skills: Tuple[str, ...]

    def __post_init__(self):
        if len(self.equipment_allowed) != EQUIPMENT_SLOT_COUNT:
            raise ValueError(
                f"Class {self.name} must define allowed equipment for exactly "
                f"{EQUIPMENT_SLOT_COUNT} slots, got {len(self.equipment_allowed)}"
            )
        if len(self.innate_skills) != INNATE_SKILL_COUNT:
            raise ValueError(
                f"Class {self.name} must list exactly {INNATE_SKILL_COUNT} innate skills"
            )
        curve_lengths = {len(self.base_hp), len(self.base_atk), len(self.base_def)}
        if len(curve_lengths) != 1 or 0 in curve_lengths:
            raise ValueError(
                f"Class {self.name} base stat curves must be non-empty and the same length"
            )

    @property
    def max_level(self) -> int:
        return len(self.base_atk)

    def allows(self, slot: int, item_type: str) -> bool:
        return item_type in self.equipment_allowed[slot]


@dataclass(frozen=True)
class Blueprint:
    """Static item definition."""
    name: str
    type: str
    atk: float = 0.0
    defense: float = 0.0
    hp: float = 0.0
    eva: float = 0.0
    crit: float = 0.0
    elemental_affinity: str = ""
    spirit_affinity: str = ""

    @property
    def base_stats(self) -> StatTriple:
        return StatTriple(self.atk, self.defense, self.hp)


@dataclass(frozen=True)
class HeroSkill:
    """A learnable hero skill."""
    name: str
    tier_1_name: str = ""
    skill_tier: int = 1

    attack_percent: float = 0.0
    attack_value: float = 0.0
    hp_percent: float = 0.0
    hp_value: float = 0.0
    defense_percent: float = 0.0
    evasion_percent: float = 0.0
    crit_chance_percent: float = 0.0
    crit_damage_percent: float = 0.0
    rest_time_percent: float = 0.0
    xp_percent: float = 0.0
    survive_fatal_blow_chance_percent: float = 0.0

    # Bonuses that only apply to items of the listed types
    item_types: Tuple[str, ...] = ()
    attack_with_item_percent: float = 0.0
    defense_with_item_percent: float = 0.0

    bonus_stats_from_all_equipment_percent: float = 0.0


@dataclass(frozen=True)
class InnateSkill:
    """One rung of a class's innate skill ladder."""
    name: str
    tier_1_name: str
    element_qty_req: int
    skill_tier: int


# =============================================================================
# BUNDLE
# =============================================================================

@dataclass(frozen=True)
class GameData:
    """
    Everything needed to resolve a hero.

    Mappings are wrapped read-only so the bundle can be shared across workers.
    """
    blueprints: Mapping[str, Blueprint] = field(default_factory=dict)
    hero_classes: Mapping[str, HeroClass] = field(default_factory=dict)
    hero_skills: Mapping[str, HeroSkill] = field(default_factory=dict)
    class_innate_skill_names: Mapping[str, str] = field(default_factory=dict)
    innate_skills: Mapping[str, InnateSkill] = field(default_factory=dict)

    def __post_init__(self):
        for attr in ('blueprints', 'hero_classes', 'hero_skills',
                     'class_innate_skill_names', 'innate_skills'):
            object.__setattr__(self, attr, MappingProxyType(dict(getattr(self, attr))))

    @property
    def hero_skill_tier_1_names(self) -> Dict[str, str]:
        """Skill name -> tier 1 family name."""
        return {name: skill.tier_1_name or name for name, skill in self.hero_skills.items()}

    def get_class(self, class_name: str) -> HeroClass:
        hero_class = self.hero_classes.get(class_name)
        if hero_class is None:
            raise HeroConfigurationError(ErrorKind.UNKNOWN_CLASS, f"Encountered unknown class {class_name}")
        return hero_class

    def get_blueprint(self, item_name: str) -> Blueprint:
        blueprint = self.blueprints.get(item_name)
        if blueprint is None:
            raise HeroConfigurationError(
                ErrorKind.UNKNOWN_ITEM, f"Equipment {item_name} could not be validated as a known item"
            )
        return blueprint

    def get_skill(self, skill_name: str) -> HeroSkill:
        skill = self.hero_skills.get(skill_name)
        if skill is None:
            raise HeroConfigurationError(
                ErrorKind.UNKNOWN_SKILL, f"Skill {skill_name} could not be found in hero skills"
            )
        return skill

    def get_innate_family(self, class_name: str) -> str:
        family = self.class_innate_skill_names.get(class_name)
        if family is None:
            raise HeroConfigurationError(
                ErrorKind.UNKNOWN_INNATE_FAMILY,
                f"Class {class_name} could not be found in class innate skill names",
            )
        return family

    def innate_skill_ladder(self, tier_1_name: str) -> List[InnateSkill]:
        """All innate skills of a family, lowest tier first."""
        ladder = [s for s in self.innate_skills.values() if s.tier_1_name == tier_1_name]
        return sorted(ladder, key=lambda s: (s.skill_tier, s.name))


# =============================================================================
# LOADING
# =============================================================================

def _hero_class_from_dict(data: Dict[str, Any]) -> HeroClass:
    return HeroClass(
        name=data['name'],
        prerequisite=data.get('prerequisite', ''),
        gold_hire_cost=int(data.get('gold_hire_cost', 0)),
        gem_hire_cost=int(data.get('gem_hire_cost', 0)),
        base_hp=tuple(float(v) for v in data['base_hp']),
        base_atk=tuple(float(v) for v in data['base_atk']),
        base_def=tuple(float(v) for v in data['base_def']),
        base_eva=float(data.get('base_eva', 0)),
        base_crit_chance=float(data.get('base_crit_chance', 0)),
        base_crit_mult=float(data.get('base_crit_mult', 0)),
        base_threat_rating=int(data.get('base_threat_rating', 0)),
        element_type=data.get('element_type', ''),
        equipment_allowed=tuple(tuple(slot) for slot in data['equipment_allowed']),
        innate_skills=tuple(data.get('innate_skills', ())),
    )


def _hero_skill_from_dict(data: Dict[str, Any]) -> HeroSkill:
    data = dict(data)
    data['item_types'] = tuple(data.get('item_types', ()))
    return HeroSkill(**data)


def game_data_from_dict(raw: Dict[str, Any]) -> GameData:
    """
    Build a GameData bundle from plain dicts (e.g. parsed JSON).

    Expected keys: classes, blueprints, skills, innate_skills (lists of records)
    and class_innate_skill_names (class -> innate family name).
    """
    classes = [_hero_class_from_dict(c) for c in raw.get('classes', [])]
    blueprints = [Blueprint(**b) for b in raw.get('blueprints', [])]
    skills = [_hero_skill_from_dict(s) for s in raw.get('skills', [])]
    innates = [InnateSkill(**i) for i in raw.get('innate_skills', [])]

    return GameData(
        blueprints={b.name: b for b in blueprints},
        hero_classes={c.name: c for c in classes},
        hero_skills={s.name: s for s in skills},
        class_innate_skill_names=dict(raw.get('class_innate_skill_names', {})),
        innate_skills={i.name: i for i in innates},
    )


def load_game_data(path: str = SAMPLE_GAME_DATA_PATH) -> GameData:
    """Load game data tables from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    return game_data_from_dict(raw)


__all__ = [
    'HeroClass',
    'Blueprint',
    'HeroSkill',
    'InnateSkill',
    'GameData',
    'game_data_from_dict',
    'load_game_data',
    'SAMPLE_GAME_DATA_PATH',
]
