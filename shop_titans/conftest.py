"""
Shared fixtures: a small, hand-checked game data bundle.

Soldier level 1: HP 20 / ATK 50 / DEF 30, Fire, threat 50
Geomancer level 1: ATK 40, Earth
Chieftain level 1: ATK 60, Earth, threat 100
Mercenary: no innate family mapped
Barbarian: innate family without a zero-requirement floor tier
"""
import pytest

from shop_titans.game_data import Blueprint, GameData, HeroClass, HeroSkill, InnateSkill
from shop_titans.hero_builder import Hero

WARRIOR_SLOTS = (
    ("Sword", "Axe"),
    ("Heavy Armor",),
    ("Helmet",),
    ("Gauntlets",),
    ("Heavy Footwear",),
    ("Shield", "Ring"),
)

MAGE_SLOTS = (
    ("Staff",),
    ("Clothes",),
    ("Magician Hat",),
    ("Gloves",),
    ("Shoes",),
    ("Ring",),
)


def make_class(name, element, atk, slots=WARRIOR_SLOTS, threat=50):
    return HeroClass(
        name=name,
        prerequisite="",
        gold_hire_cost=0,
        gem_hire_cost=0,
        base_hp=(20.0, 25.0),
        base_atk=(atk, atk + 10.0),
        base_def=(30.0, 35.0),
        base_eva=0.05,
        base_crit_chance=0.05,
        base_crit_mult=2.0,
        base_threat_rating=threat,
        element_type=element,
        equipment_allowed=slots,
        innate_skills=(name, f"{name} II", f"{name} III", f"{name} IV"),
    )


def make_ladder(family, requirements):
    return [
        InnateSkill(name=f"{family} {tier}", tier_1_name=family, element_qty_req=req, skill_tier=tier)
        for tier, req in requirements
    ]


@pytest.fixture
def game_data() -> GameData:
    classes = [
        make_class("Soldier", "Fire", 50.0),
        make_class("Geomancer", "Earth", 40.0, slots=MAGE_SLOTS),
        make_class("Chieftain", "Earth", 60.0, threat=100),
        make_class("Mercenary", "Water", 55.0),
        make_class("Barbarian", "Fire", 58.0),
    ]
    innates = (
        make_ladder("Tough", [(1, 0), (2, 20), (3, 45), (4, 80)])
        + make_ladder("Earth Ward", [(1, 0), (2, 20), (3, 45), (4, 80)])
        + make_ladder("Warcry", [(1, 0), (2, 20), (3, 45), (4, 80)])
        + make_ladder("Rampage", [(2, 20), (3, 45)])
    )
    blueprints = [
        Blueprint("Broadsword", "Sword", atk=100.0, elemental_affinity="Fire", spirit_affinity="Wolf"),
        Blueprint("Tiny Sword", "Sword", atk=10.0),
        Blueprint("Plate Mail", "Heavy Armor", defense=80.0, hp=20.0),
        Blueprint("Ruby Ring", "Ring", atk=40.0, hp=4.0, eva=0.01, crit=0.02),
        Blueprint("Oak Staff", "Staff", atk=90.0, elemental_affinity="Earth"),
    ]
    skills = [
        HeroSkill("Sword Master", tier_1_name="Sword Master",
                  attack_with_item_percent=0.2, item_types=("Sword",)),
        HeroSkill("Craftsman", tier_1_name="Craftsman", bonus_stats_from_all_equipment_percent=0.1),
        HeroSkill("Rage", tier_1_name="Rage", attack_percent=0.1),
        HeroSkill("Rage II", tier_1_name="Rage", skill_tier=2, attack_percent=0.15),
        HeroSkill("Brawler", tier_1_name="Brawler", attack_value=15.0),
        HeroSkill("Iron Skin", tier_1_name="Iron Skin", defense_percent=0.1),
        HeroSkill("Swift Learner", tier_1_name="Swift Learner", xp_percent=0.2, rest_time_percent=-0.1),
        HeroSkill("Last Stand", tier_1_name="Last Stand", survive_fatal_blow_chance_percent=0.1),
    ]
    return GameData(
        blueprints={b.name: b for b in blueprints},
        hero_classes={c.name: c for c in classes},
        hero_skills={s.name: s for s in skills},
        class_innate_skill_names={
            "Soldier": "Tough",
            "Geomancer": "Earth Ward",
            "Chieftain": "Warcry",
            "Barbarian": "Rampage",
        },
        innate_skills={i.name: i for i in innates},
    )


def _make_hero(identifier="h1", hero_class="Soldier", items=None, quality=None,
              elements=None, spirits=None, skills=None, **kwargs) -> Hero:
    """Hero with every slot empty unless given (lists are padded to full length)."""
    def pad(values, size):
        values = list(values or [])
        return values + [""] * (size - len(values))

    return Hero(
        identifier=identifier,
        hero_class=hero_class,
        equipment_equipped=pad(items, 6),
        equipment_quality=pad(quality, 6),
        elements_socketed=pad(elements, 6),
        spirits_socketed=pad(spirits, 6),
        skills=pad(skills, 4),
        **kwargs,
    )


@pytest.fixture
def make_hero():
    return _make_hero
