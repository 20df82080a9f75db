"""
Unit tests for core constants, socket descriptors and error types.
"""
import pytest

from shop_titans.core import (
    ELEMENT_GRADE_POINTS,
    ELEMENT_SOCKET_BONUSES,
    NO_SPIRIT_EFFECT,
    QUALITY_MULTIPLIERS,
    SPIRIT_EFFECTS,
    SPIRIT_TIER_BONUSES,
    ElementGrade,
    ElementSocket,
    ErrorKind,
    HeroConfigurationError,
    Quality,
    SpiritName,
    SpiritSocket,
    SpiritTier,
    StatTriple,
    element_grade_from_string,
    get_element_socket_bonus,
    get_quality_multiplier,
    get_spirit_effect,
    parse_element_descriptor,
    parse_spirit_descriptor,
    quality_from_string,
    spirit_name_from_string,
    spirit_tier_from_string,
)


class TestQuality:
    """Tests for gear quality parsing and multipliers."""

    def test_every_quality_has_a_multiplier(self):
        for quality in Quality:
            assert quality in QUALITY_MULTIPLIERS

    def test_multipliers_increase_with_quality(self):
        multipliers = [get_quality_multiplier(q) for q in Quality]
        assert multipliers == sorted(multipliers)
        assert multipliers[0] == 1.0

    def test_from_string(self):
        assert quality_from_string("Epic") is Quality.EPIC
        assert quality_from_string("Legendary") is Quality.LEGENDARY

    def test_unknown_quality_fails(self):
        with pytest.raises(HeroConfigurationError) as exc_info:
            quality_from_string("Mythic")
        assert exc_info.value.kind is ErrorKind.UNKNOWN_QUALITY

    def test_empty_quality_fails(self):
        with pytest.raises(HeroConfigurationError):
            quality_from_string("")


class TestElementTables:
    """Tests for element grades and socket bonuses."""

    def test_every_grade_has_points_and_bonus(self):
        for grade in ElementGrade:
            assert grade in ELEMENT_GRADE_POINTS
            assert grade in ELEMENT_SOCKET_BONUSES

    def test_grade_points(self):
        assert [ELEMENT_GRADE_POINTS[g] for g in ElementGrade] == [5, 10, 15, 25]

    def test_grade_from_string(self):
        assert element_grade_from_string("3") is ElementGrade.THREE

    @pytest.mark.parametrize("grade", ["0", "5", "x", "II", "02", "+2", "\u0662", "2.0", ""])
    def test_unknown_grade_fails(self, grade):
        with pytest.raises(HeroConfigurationError) as exc_info:
            element_grade_from_string(grade)
        assert exc_info.value.kind is ErrorKind.UNKNOWN_ELEMENT_GRADE

    def test_regular_bonus(self):
        assert get_element_socket_bonus("Fire", ElementGrade.ONE) == StatTriple(14, 10, 3)
        assert get_element_socket_bonus("Water", ElementGrade.FOUR) == StatTriple(89, 59, 18)

    def test_special_elements_override_their_grade(self):
        """Luxurious 1 and Opulent 3 are stronger than regular elements of that grade."""
        assert get_element_socket_bonus("Luxurious", ElementGrade.ONE) == StatTriple(26, 18, 5)
        assert get_element_socket_bonus("Opulent", ElementGrade.THREE) == StatTriple(63, 42, 13)

    def test_special_element_at_other_grade_is_regular(self):
        assert get_element_socket_bonus("Luxurious", ElementGrade.TWO) == ELEMENT_SOCKET_BONUSES[ElementGrade.TWO]


class TestSpiritTables:
    """Tests for spirit tiers and special effects."""

    def test_every_tier_has_a_bonus(self):
        for tier in SpiritTier:
            assert tier in SPIRIT_TIER_BONUSES

    def test_tier_from_string(self):
        assert spirit_tier_from_string("TM") is SpiritTier.TM
        assert spirit_tier_from_string("T12") is SpiritTier.T12

    @pytest.mark.parametrize("tier", ["T6", "t7", "7", "T13"])
    def test_unknown_tier_fails(self, tier):
        with pytest.raises(HeroConfigurationError) as exc_info:
            spirit_tier_from_string(tier)
        assert exc_info.value.kind is ErrorKind.UNKNOWN_SPIRIT_TIER

    def test_every_named_spirit_has_effects(self):
        for name in SpiritName:
            on, off = SPIRIT_EFFECTS[name]
            assert on != NO_SPIRIT_EFFECT
            assert off != NO_SPIRIT_EFFECT

    def test_affinity_selects_stronger_effect(self):
        assert get_spirit_effect("Wolf", on_affinity=True).atk_percent == pytest.approx(0.10)
        assert get_spirit_effect("Wolf", on_affinity=False).atk_percent == pytest.approx(0.05)

    def test_spirits_without_effect(self):
        """Sim-only spirits (Shark, Armadillo, ...) grant no special effect."""
        assert spirit_name_from_string("Shark") is None
        assert get_spirit_effect("Armadillo", on_affinity=True) == NO_SPIRIT_EFFECT

    def test_overlay_later_effect_wins(self):
        combined = get_spirit_effect("Wolf", True).overlay(get_spirit_effect("Wolf", False))
        assert combined.atk_percent == pytest.approx(0.05)

    def test_overlay_keeps_unset_fields(self):
        combined = get_spirit_effect("Kraken", True).overlay(get_spirit_effect("Ram", False))
        assert combined.atk_value == pytest.approx(125.0)
        assert combined.def_percent == pytest.approx(0.05)
        assert NO_SPIRIT_EFFECT.overlay(NO_SPIRIT_EFFECT) == NO_SPIRIT_EFFECT


class TestStatTriple:
    """Tests for StatTriple helpers."""

    def test_scaled(self):
        assert StatTriple(10, 4, 2).scaled(1.5) == StatTriple(15, 6, 3)

    def test_capped_per_dimension(self):
        capped = StatTriple(89, 59, 18).capped(StatTriple(10, 100, 0))
        assert capped == StatTriple(10, 59, 0)


class TestElementDescriptors:
    """Tests for element socket descriptor parsing."""

    def test_parse(self):
        socket = parse_element_descriptor("Fire 2")
        assert socket == ElementSocket("Fire", ElementGrade.TWO)
        assert socket.points == 10

    def test_empty_socket(self):
        assert parse_element_descriptor("") is None

    @pytest.mark.parametrize("descriptor", ["Fire", "Fire 2 extra", " "])
    def test_malformed(self, descriptor):
        with pytest.raises(HeroConfigurationError) as exc_info:
            parse_element_descriptor(descriptor)
        assert exc_info.value.kind is ErrorKind.MALFORMED_DESCRIPTOR

    def test_affinity_multiplies_flat_bonus(self):
        socket = ElementSocket("Fire", ElementGrade.TWO)
        assert socket.flat_bonus("Water") == StatTriple(38, 25, 8)
        assert socket.flat_bonus("Fire") == StatTriple(57, 37.5, 12)


class TestSpiritDescriptors:
    """Tests for spirit socket descriptor parsing."""

    def test_parse(self):
        assert parse_spirit_descriptor("Mundra TM") == SpiritSocket("Mundra", SpiritTier.TM)

    def test_empty_socket(self):
        assert parse_spirit_descriptor("") is None

    def test_malformed(self):
        with pytest.raises(HeroConfigurationError) as exc_info:
            parse_spirit_descriptor("Wolf")
        assert exc_info.value.kind is ErrorKind.MALFORMED_DESCRIPTOR

    def test_affinity_multiplies_flat_bonus(self):
        socket = SpiritSocket("Wolf", SpiritTier.T7)
        assert socket.flat_bonus("Bear") == StatTriple(41, 27, 8)
        assert socket.flat_bonus("Wolf") == StatTriple(61.5, 40.5, 12)

    def test_affinity_does_not_multiply_special_effect(self):
        socket = SpiritSocket("Wolf", SpiritTier.T7)
        assert socket.special_effect("Wolf").atk_percent == pytest.approx(0.10)


class TestHeroConfigurationError:
    """Tests for error attribution."""

    def test_message_includes_kind(self):
        error = HeroConfigurationError(ErrorKind.UNKNOWN_ITEM, "Equipment X unknown")
        assert "[unknown_item]" in str(error)
        assert error.hero_id is None

    def test_for_hero(self):
        error = HeroConfigurationError(ErrorKind.UNKNOWN_ITEM, "Equipment X unknown").for_hero("h7")
        assert error.hero_id == "h7"
        assert error.kind is ErrorKind.UNKNOWN_ITEM
        assert "hero h7" in str(error)

    def test_is_value_error(self):
        assert issubclass(HeroConfigurationError, ValueError)
