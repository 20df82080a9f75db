"""
Unit tests for encounters.py - difficulty presets and the stat check trial.
"""
import pytest

from shop_titans.encounters import (
    ENCOUNTER_TIERS,
    EncounterDifficulty,
    EncounterTier,
    StatCheckTrial,
    get_difficulty_from_string,
    get_tier_sequence,
)
from shop_titans.hero_builder import SimHero


def sim_hero(identifier="h1", atk=100.0, defense=50.0, hp=100.0, eva=0.0, crit_chance=0.0):
    return SimHero(
        identifier=identifier, hero_class="Soldier", level=1, rank=1, innate_tier=1,
        hp=hp, atk=atk, defense=defense, threat_rating=50,
        crit_chance=crit_chance, crit_mult=2.0, eva=eva,
        element_qty=0, element_type="Fire",
        armadillo_qty=0, lizard_qty=0, shark_qty=0, dinosaur_qty=0, mundra_qty=0,
        atk_modifier=0.0, def_modifier=0.0,
    )


class TestDifficulty:
    """Tests for difficulty presets."""

    def test_every_difficulty_has_a_tier(self):
        for difficulty in EncounterDifficulty:
            assert ENCOUNTER_TIERS[difficulty].name == difficulty.value

    def test_from_string(self):
        assert get_difficulty_from_string("HARD") is EncounterDifficulty.HARD

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            get_difficulty_from_string("nightmare")

    def test_default_sequence_gets_harder(self):
        tiers = get_tier_sequence()
        assert len(tiers) == len(EncounterDifficulty)
        hp = [t.enemy_hp for t in tiers]
        assert hp == sorted(hp)

    def test_named_sequence(self):
        assert [t.name for t in get_tier_sequence(["easy", "boss"])] == ["easy", "boss"]


class TestStatCheckTrial:
    """Tests for the round-based trial executor."""

    def test_overwhelming_team_wins(self):
        trial = StatCheckTrial(seed=1)
        team = [sim_hero(atk=1e6, hp=1e9)]
        assert all(trial(team, ENCOUNTER_TIERS[EncounterDifficulty.BOSS]) for _ in range(20))

    def test_harmless_team_loses(self):
        trial = StatCheckTrial(seed=1)
        team = [sim_hero(atk=0.0)]
        assert not any(trial(team, ENCOUNTER_TIERS[EncounterDifficulty.EASY]) for _ in range(20))

    def test_dead_team_loses(self):
        """A hero killed in round one never gets a second attack."""
        trial = StatCheckTrial(seed=1)
        tier = EncounterTier("wall", enemy_hp=500.0, enemy_atk=1000.0)
        assert not trial([sim_hero(atk=100.0, hp=10.0)], tier)

    def test_seed_is_reproducible(self):
        team = [sim_hero("a", atk=80.0, crit_chance=0.3, eva=0.2), sim_hero("b", atk=60.0)]
        tier = ENCOUNTER_TIERS[EncounterDifficulty.MEDIUM]
        first = StatCheckTrial(seed=7)
        second = StatCheckTrial(seed=7)
        assert [first(team, tier) for _ in range(30)] == [second(team, tier) for _ in range(30)]

    def test_duplicate_identifiers_keep_separate_hp(self):
        """Two heroes sharing an identifier each keep their own HP pool."""
        trial = StatCheckTrial(seed=1)
        tier = EncounterTier("pair", enemy_hp=300.0, enemy_atk=1000.0)
        team = [sim_hero("h1", atk=100.0, hp=10.0), sim_hero("h1", atk=100.0, hp=10.0)]
        # Round one: 200 damage, one hero falls. Round two: the other finishes it.
        assert trial(team, tier)
