"""
Shop Titans - Hero Builder
==========================
Turns a hero's raw configuration (class, level, seeds, skills, gear, sockets)
into final combat stats.

Resolution pipeline (see ``resolve_hero``):
1. validate_equipment  - class exists, every item exists and fits its slot
2. scale_by_class      - base HP/ATK/DEF from the class curve at level - 1
3. calculate_innate_tier - highest innate tier unlocked by element investment
4. calculate_stat_improvements_from_gear_and_skills
     - per-item bonuses (quality, element socket, spirit socket, skill item bonuses)
     - hero-wide skill bonuses
     - class conditional attack bonus (Geomancer / Astramancer / Chieftain)
     - final ATK / DEF / HP / EVA / crit composition

ATK formula:
    seeded   = atk + hp_seeds * 4
    core     = seeded + spirit_atk_value + skill_atk_value
    mult     = 1 + skill_atk% + class_bonus + spirit_atk%
    atk      = core * mult + gear_atk * mult
"""

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Tuple

from .core.constants import (
    ATTACK_PER_HP_SEED,
    DEFENSE_PER_DEF_SEED,
    ELEMENT_QTY_ATTACK_CLASSES,
    EMPTY,
    EQUIPMENT_SLOT_COUNT,
    NO_SPIRIT_EFFECT,
    SKILL_SLOT_COUNT,
    SPIRIT_QTY_MAX,
    THREAT_ATTACK_CLASSES,
    TRACKED_SIM_SPIRITS,
    ZERO_TRIPLE,
    SpiritEffect,
    get_quality_multiplier,
    quality_from_string,
)
from .core.errors import ErrorKind, HeroConfigurationError
from .core.sockets import parse_element_descriptor, parse_spirit_descriptor
from .game_data import Blueprint, GameData, HeroSkill, InnateSkill

logger = logging.getLogger(__name__)


# =============================================================================
# INTERMEDIATE RESULTS
# =============================================================================

@dataclass
class GearBonus:
    """Contribution of one equipped item (or the sum over all items)."""
    atk: float = 0.0
    defense: float = 0.0
    hp: float = 0.0
    eva: float = 0.0
    crit: float = 0.0
    # Hero-wide spirit effects; a later slot overrides earlier ones per field
    spirit_effect: SpiritEffect = NO_SPIRIT_EFFECT

    def __add__(self, other: 'GearBonus') -> 'GearBonus':
        return GearBonus(
            atk=self.atk + other.atk,
            defense=self.defense + other.defense,
            hp=self.hp + other.hp,
            eva=self.eva + other.eva,
            crit=self.crit + other.crit,
            spirit_effect=self.spirit_effect.overlay(other.spirit_effect),
        )


@dataclass
class SkillTotals:
    """Hero-wide skill bonuses summed over the learned skills."""
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

    def add_skill(self, skill: HeroSkill) -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(skill, f.name))


@dataclass
class UtilityBonuses:
    """Skill bonuses that do not feed combat stats."""
    rest_time_percent: float = 0.0
    xp_percent: float = 0.0
    survive_fatal_blow_chance_percent: float = 0.0


@dataclass
class SimHero:
    """Fully resolved hero record handed to a trial executor."""
    identifier: str
    hero_class: str
    level: int
    rank: int
    innate_tier: int
    hp: float
    atk: float
    defense: float
    threat_rating: int
    crit_chance: float
    crit_mult: float
    eva: float
    element_qty: int
    element_type: str
    armadillo_qty: int
    lizard_qty: int
    shark_qty: int
    dinosaur_qty: int
    mundra_qty: int
    atk_modifier: float
    def_modifier: float


# =============================================================================
# HERO
# =============================================================================

@dataclass
class Hero:
    """
    A hero's configuration plus the stats resolution writes back into it.

    The four slot arrays (equipment_equipped, equipment_quality,
    elements_socketed, spirits_socketed) are slot-aligned: index i always refers
    to equipment slot i. An empty string marks an empty slot or socket.
    """
    identifier: str
    hero_class: str
    level: int = 1
    rank: int = 1
    innate_tier: int = 0

    # Written by resolution
    hp: float = 0.0
    atk: float = 0.0
    defense: float = 0.0
    eva: float = 0.0
    crit_chance: float = 0.0
    crit_mult: float = 0.0
    threat_rating: int = 0
    element_type: str = ""

    atk_modifier: float = 0.0
    def_modifier: float = 0.0

    hp_seeds: int = 0
    atk_seeds: int = 0
    def_seeds: int = 0

    skills: List[str] = field(default_factory=lambda: [EMPTY] * SKILL_SLOT_COUNT)

    equipment_equipped: List[str] = field(default_factory=lambda: [EMPTY] * EQUIPMENT_SLOT_COUNT)
    equipment_quality: List[str] = field(default_factory=lambda: [EMPTY] * EQUIPMENT_SLOT_COUNT)
    elements_socketed: List[str] = field(default_factory=lambda: [EMPTY] * EQUIPMENT_SLOT_COUNT)
    spirits_socketed: List[str] = field(default_factory=lambda: [EMPTY] * EQUIPMENT_SLOT_COUNT)

    utility_bonuses: UtilityBonuses = field(default_factory=UtilityBonuses)

    def __post_init__(self):
        if len(self.skills) != SKILL_SLOT_COUNT:
            raise HeroConfigurationError(
                ErrorKind.SLOT_COUNT,
                f"Expected {SKILL_SLOT_COUNT} skills, got {len(self.skills)}",
                self.identifier,
            )
        for name in ('equipment_equipped', 'equipment_quality',
                     'elements_socketed', 'spirits_socketed'):
            values = getattr(self, name)
            if len(values) != EQUIPMENT_SLOT_COUNT:
                raise HeroConfigurationError(
                    ErrorKind.SLOT_COUNT,
                    f"{name} must have {EQUIPMENT_SLOT_COUNT} entries, got {len(values)}",
                    self.identifier,
                )
            setattr(self, name, list(values))
        self.skills = list(self.skills)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_equipment(self, game_data: GameData) -> None:
        """Check the class exists and each equipped item is allowed in its slot."""
        hero_class = game_data.get_class(self.hero_class)

        for slot, item_name in enumerate(self.equipment_equipped):
            if item_name == EMPTY:
                continue
            blueprint = game_data.get_blueprint(item_name)
            if not hero_class.allows(slot, blueprint.type):
                raise HeroConfigurationError(
                    ErrorKind.DISALLOWED_CATEGORY,
                    f"Equipment {item_name} is of type {blueprint.type} that is not allowed "
                    f"for this class in this slot (# {slot}). "
                    f"Valid options: {list(hero_class.equipment_allowed[slot])}",
                    self.identifier,
                )

    # -------------------------------------------------------------------------
    # Element / spirit investment
    # -------------------------------------------------------------------------

    def calculate_element_qty(self) -> int:
        """Elemental investment from sockets matching the hero's element type."""
        element_qty = 0
        for descriptor in self.elements_socketed:
            socket = parse_element_descriptor(descriptor)
            if socket is not None and socket.element == self.element_type:
                element_qty += socket.points
        return element_qty

    def calculate_spirit_qty(self, spirit_descriptor: str) -> int:
        """How many sockets hold exactly this spirit (e.g. 'Shark T9')."""
        qty = sum(1 for s in self.spirits_socketed if s == spirit_descriptor)
        if qty > SPIRIT_QTY_MAX:
            return 0
        return qty

    def calculate_innate_skill_name(self, game_data: GameData) -> str:
        return game_data.get_innate_family(self.hero_class)

    def calculate_innate_tier(self, game_data: GameData) -> InnateSkill:
        """
        Select the highest innate tier the hero's element investment unlocks.

        A tier qualifies when its requirement is strictly below the hero's
        element quantity; the zero-requirement floor tier always qualifies.
        """
        element_qty = self.calculate_element_qty()
        family = self.calculate_innate_skill_name(game_data)

        variants = [
            s for s in game_data.innate_skill_ladder(family)
            if s.element_qty_req < element_qty or s.element_qty_req == 0
        ]
        logger.debug("Innate skill variants for %s (element qty %d): %s",
                     self.identifier, element_qty, [s.name for s in variants])

        if not variants:
            raise HeroConfigurationError(
                ErrorKind.NO_QUALIFYING_INNATE_TIER,
                f"No {family} innate tier is unlocked by element qty {element_qty}",
                self.identifier,
            )

        innate = max(variants, key=lambda s: (s.skill_tier, s.name))
        self.innate_tier = innate.skill_tier
        return innate

    # -------------------------------------------------------------------------
    # Class scaling
    # -------------------------------------------------------------------------

    def scale_by_class(self, game_data: GameData) -> None:
        """Read base stats off the class curve for the hero's level."""
        hero_class = game_data.get_class(self.hero_class)

        if not 1 <= self.level <= hero_class.max_level:
            raise HeroConfigurationError(
                ErrorKind.UNSUPPORTED_LEVEL,
                f"Level {self.level} is outside 1-{hero_class.max_level} for class {self.hero_class}",
                self.identifier,
            )

        level_index = self.level - 1
        self.hp = hero_class.base_hp[level_index]
        self.atk = hero_class.base_atk[level_index]
        self.defense = hero_class.base_def[level_index]
        self.eva = hero_class.base_eva
        self.crit_chance = hero_class.base_crit_chance
        self.crit_mult = hero_class.base_crit_mult
        self.threat_rating = hero_class.base_threat_rating
        self.element_type = hero_class.element_type

    # -------------------------------------------------------------------------
    # Gear
    # -------------------------------------------------------------------------

    def _get_skills(self, game_data: GameData) -> List[HeroSkill]:
        return [game_data.get_skill(name) for name in self.skills if name != EMPTY]

    @staticmethod
    def calculate_item_skill_bonuses(blueprint: Blueprint,
                                     skills: List[HeroSkill]) -> Tuple[float, float, float]:
        """
        Skill bonuses applied to a single item.

        Returns:
            (all_equipment_percent, item_atk_percent, item_def_percent)
        """
        all_percent = 0.0
        atk_percent = 0.0
        def_percent = 0.0
        for skill in skills:
            all_percent += skill.bonus_stats_from_all_equipment_percent
            for item_type in skill.item_types:
                if blueprint.type == item_type:
                    atk_percent += skill.attack_with_item_percent
                    def_percent += skill.defense_with_item_percent
        return all_percent, atk_percent, def_percent

    def calculate_gear_bonus(self, slot: int, blueprint: Blueprint,
                             skills: List[HeroSkill]) -> GearBonus:
        """Final contribution of the item in ``slot``."""
        all_pct, item_atk_pct, item_def_pct = self.calculate_item_skill_bonuses(blueprint, skills)

        quality_mult = get_quality_multiplier(quality_from_string(self.equipment_quality[slot]))
        base = blueprint.base_stats

        element = parse_element_descriptor(self.elements_socketed[slot])
        element_bonus = ZERO_TRIPLE if element is None else element.flat_bonus(blueprint.elemental_affinity)

        spirit = parse_spirit_descriptor(self.spirits_socketed[slot])
        if spirit is None:
            spirit_bonus = ZERO_TRIPLE
            spirit_effect = NO_SPIRIT_EFFECT
        else:
            spirit_bonus = spirit.flat_bonus(blueprint.spirit_affinity)
            spirit_effect = spirit.special_effect(blueprint.spirit_affinity)

        # Socket bonuses never exceed the item's own base stat
        element_bonus = element_bonus.capped(base)
        spirit_bonus = spirit_bonus.capped(base)

        return GearBonus(
            atk=(base.atk * quality_mult + element_bonus.atk + spirit_bonus.atk)
                * (1.0 + item_atk_pct + all_pct),
            defense=(base.defense * quality_mult + element_bonus.defense + spirit_bonus.defense)
                * (1.0 + item_def_pct + all_pct),
            hp=(base.hp * quality_mult + element_bonus.hp + spirit_bonus.hp) * (1.0 + all_pct),
            eva=blueprint.eva * (1.0 + all_pct),
            crit=blueprint.crit * (1.0 + all_pct),
            spirit_effect=spirit_effect,
        )

    def calculate_gear_totals(self, game_data: GameData) -> GearBonus:
        """Sum of the per-item contributions over all six slots."""
        skills = self._get_skills(game_data)
        totals = GearBonus()
        for slot, item_name in enumerate(self.equipment_equipped):
            if item_name == EMPTY:
                continue
            totals = totals + self.calculate_gear_bonus(slot, game_data.get_blueprint(item_name), skills)
        return totals

    # -------------------------------------------------------------------------
    # Skills / class
    # -------------------------------------------------------------------------

    def aggregate_skill_bonuses(self, game_data: GameData) -> SkillTotals:
        totals = SkillTotals()
        for skill in self._get_skills(game_data):
            totals.add_skill(skill)
        return totals

    def calculate_class_conditional_bonus(self) -> float:
        """Attack percent granted by the hero's class, as a fraction."""
        if self.hero_class in ELEMENT_QTY_ATTACK_CLASSES:
            return self.calculate_element_qty() / 100.0
        if self.hero_class in THREAT_ATTACK_CLASSES:
            return THREAT_ATTACK_CLASSES[self.hero_class] * self.threat_rating / 100.0
        return 0.0

    # -------------------------------------------------------------------------
    # Final composition
    # -------------------------------------------------------------------------

    def calculate_stat_improvements_from_gear_and_skills(self, game_data: GameData) -> None:
        """Apply gear, skill, spirit and class bonuses on top of the class base stats."""
        gear = self.calculate_gear_totals(game_data)
        skill = self.aggregate_skill_bonuses(game_data)
        spirit = gear.spirit_effect
        class_bonus = self.calculate_class_conditional_bonus()

        # ATK
        seeded_atk = self.atk + self.hp_seeds * ATTACK_PER_HP_SEED
        core_atk = seeded_atk + spirit.atk_value + skill.attack_value
        atk_mult = 1.0 + skill.attack_percent + class_bonus + spirit.atk_percent
        self.atk = core_atk * atk_mult + gear.atk * atk_mult
        self.atk_modifier = skill.attack_percent + class_bonus + spirit.atk_percent

        # DEF
        seeded_def = self.defense + self.def_seeds * DEFENSE_PER_DEF_SEED
        core_def = seeded_def + spirit.def_value
        def_mult = 1.0 + skill.defense_percent + spirit.def_percent
        self.defense = core_def * def_mult + gear.defense * def_mult
        self.def_modifier = skill.defense_percent + spirit.def_percent

        # HP
        hp_mult = 1.0 + skill.hp_percent + spirit.hp_percent
        self.hp = (self.hp + spirit.hp_value + skill.hp_value + gear.hp) * hp_mult

        # Additive stats
        self.eva += gear.eva + skill.evasion_percent + spirit.eva_percent
        self.crit_chance += gear.crit + skill.crit_chance_percent + spirit.crit_chance_percent
        self.crit_mult += skill.crit_damage_percent + spirit.crit_dmg_percent

        self.utility_bonuses = UtilityBonuses(
            rest_time_percent=skill.rest_time_percent,
            xp_percent=skill.xp_percent,
            survive_fatal_blow_chance_percent=skill.survive_fatal_blow_chance_percent,
        )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def round_floats_for_display(self) -> 'Hero':
        """Copy of this hero with stats rounded to 2 decimals."""
        h2 = copy.deepcopy(self)
        h2.hp = round(h2.hp, 2)
        h2.atk = round(h2.atk, 2)
        h2.defense = round(h2.defense, 2)
        h2.eva = round(h2.eva, 2)
        h2.crit_chance = round(h2.crit_chance, 2)
        h2.crit_mult = round(h2.crit_mult, 2)
        return h2

    def to_sim_hero(self) -> SimHero:
        """Flatten a resolved hero into the record trial executors consume."""
        armadillo, lizard, shark, dinosaur, mundra = (
            self.calculate_spirit_qty(s) for s in TRACKED_SIM_SPIRITS
        )
        return SimHero(
            identifier=self.identifier,
            hero_class=self.hero_class,
            level=self.level,
            rank=self.rank,
            innate_tier=self.innate_tier,
            hp=self.hp,
            atk=self.atk,
            defense=self.defense,
            threat_rating=self.threat_rating,
            crit_chance=self.crit_chance,
            crit_mult=self.crit_mult,
            eva=self.eva,
            element_qty=self.calculate_element_qty(),
            element_type=self.element_type,
            armadillo_qty=armadillo,
            lizard_qty=lizard,
            shark_qty=shark,
            dinosaur_qty=dinosaur,
            mundra_qty=mundra,
            atk_modifier=self.atk_modifier,
            def_modifier=self.def_modifier,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Raw configuration fields (what a loader or generator would write)."""
        return {
            'identifier': self.identifier,
            'hero_class': self.hero_class,
            'level': self.level,
            'rank': self.rank,
            'hp_seeds': self.hp_seeds,
            'atk_seeds': self.atk_seeds,
            'def_seeds': self.def_seeds,
            'skills': list(self.skills),
            'equipment_equipped': list(self.equipment_equipped),
            'equipment_quality': list(self.equipment_quality),
            'elements_socketed': list(self.elements_socketed),
            'spirits_socketed': list(self.spirits_socketed),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Hero':
        """Build an unresolved hero from a configuration record."""
        return cls(
            identifier=data['identifier'],
            hero_class=data['hero_class'],
            level=int(data.get('level', 1)),
            rank=int(data.get('rank', 1)),
            hp_seeds=int(data.get('hp_seeds', 0)),
            atk_seeds=int(data.get('atk_seeds', 0)),
            def_seeds=int(data.get('def_seeds', 0)),
            skills=list(data.get('skills', [EMPTY] * SKILL_SLOT_COUNT)),
            equipment_equipped=list(data.get('equipment_equipped', [EMPTY] * EQUIPMENT_SLOT_COUNT)),
            equipment_quality=list(data.get('equipment_quality', [EMPTY] * EQUIPMENT_SLOT_COUNT)),
            elements_socketed=list(data.get('elements_socketed', [EMPTY] * EQUIPMENT_SLOT_COUNT)),
            spirits_socketed=list(data.get('spirits_socketed', [EMPTY] * EQUIPMENT_SLOT_COUNT)),
        )


# =============================================================================
# PIPELINE
# =============================================================================

def resolve_hero(hero: Hero, game_data: GameData) -> Hero:
    """
    Run the full resolution pipeline on ``hero`` in place and return it.

    Raises:
        HeroConfigurationError: on any unknown identifier or malformed socket.
            The error is attributed to the hero being resolved.
    """
    try:
        hero.validate_equipment(game_data)
        hero.scale_by_class(game_data)
        hero.calculate_innate_tier(game_data)
        hero.calculate_stat_improvements_from_gear_and_skills(game_data)
    except HeroConfigurationError as e:
        if e.hero_id is None:
            raise e.for_hero(hero.identifier) from e
        raise
    return hero


def resolve_heroes(heroes: List[Hero], game_data: GameData,
                   fresh_copy: bool = True) -> List[Hero]:
    """Resolve a team. With ``fresh_copy`` the inputs are left untouched."""
    return [resolve_hero(copy.deepcopy(h) if fresh_copy else h, game_data) for h in heroes]


def build_sim_team(heroes: List[Hero], game_data: GameData) -> List[SimHero]:
    return [h.to_sim_hero() for h in resolve_heroes(heroes, game_data)]


__all__ = [
    'GearBonus',
    'SkillTotals',
    'UtilityBonuses',
    'SimHero',
    'Hero',
    'resolve_hero',
    'resolve_heroes',
    'build_sim_team',
]
