"""
Shop Titans - Socket Descriptors
================================
Parsing and bonus lookup for socketed elements and spirits.

Descriptors are written as "<name> <grade-or-tier>":
- Element: "Fire 2", "Luxurious 1"   (grade 1-4)
- Spirit:  "Wolf T7", "Mundra TM"    (tier code)

An empty string is an empty socket.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (
    AFFINITY_MULTIPLIER,
    ELEMENT_GRADE_POINTS,
    EMPTY,
    SPIRIT_TIER_BONUSES,
    ElementGrade,
    SpiritEffect,
    SpiritTier,
    StatTriple,
    element_grade_from_string,
    get_element_socket_bonus,
    get_spirit_effect,
    spirit_tier_from_string,
)
from .errors import ErrorKind, HeroConfigurationError


@dataclass(frozen=True)
class ElementSocket:
    element: str
    grade: ElementGrade

    @property
    def points(self) -> int:
        """Elemental investment points this socket is worth to a matching hero."""
        return ELEMENT_GRADE_POINTS[self.grade]

    def flat_bonus(self, item_affinity: str) -> StatTriple:
        """Flat item bonus, amplified when the item's affinity matches."""
        bonus = get_element_socket_bonus(self.element, self.grade)
        if item_affinity == self.element:
            bonus = bonus.scaled(AFFINITY_MULTIPLIER)
        return bonus


@dataclass(frozen=True)
class SpiritSocket:
    name: str
    tier: SpiritTier

    def flat_bonus(self, item_affinity: str) -> StatTriple:
        """Flat item bonus, amplified when the item's affinity matches."""
        bonus = SPIRIT_TIER_BONUSES[self.tier]
        if item_affinity == self.name:
            bonus = bonus.scaled(AFFINITY_MULTIPLIER)
        return bonus

    def special_effect(self, item_affinity: str) -> SpiritEffect:
        """Hero-wide effect; affinity picks the stronger magnitude, never the 1.5x."""
        return get_spirit_effect(self.name, on_affinity=item_affinity == self.name)


def _split_descriptor(descriptor: str, expected: str) -> Tuple[str, str]:
    parts = descriptor.split()
    if len(parts) != 2:
        raise HeroConfigurationError(
            ErrorKind.MALFORMED_DESCRIPTOR,
            f"Descriptor {descriptor!r} must conform to format [name] [{expected}]",
        )
    return parts[0], parts[1]


def parse_element_descriptor(descriptor: str) -> Optional[ElementSocket]:
    """Parse "<element> <grade>". Returns None for an empty socket."""
    if descriptor == EMPTY:
        return None
    element, grade = _split_descriptor(descriptor, "grade: 1-4")
    return ElementSocket(element, element_grade_from_string(grade))


def parse_spirit_descriptor(descriptor: str) -> Optional[SpiritSocket]:
    """Parse "<spirit> <tier>". Returns None for an empty socket."""
    if descriptor == EMPTY:
        return None
    name, tier = _split_descriptor(descriptor, "tier: T4-T12")
    return SpiritSocket(name, spirit_tier_from_string(tier))
