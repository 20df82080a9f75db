"""
Shop Titans - Core Module
=========================
Single source of truth for hero formula constants, socket tables and error types.

All other modules should import from here rather than hard-coding game values.
"""

from .constants import (
    # Layout
    EQUIPMENT_SLOT_COUNT,
    SKILL_SLOT_COUNT,
    EMPTY,
    # Formula constants
    ATTACK_PER_HP_SEED,
    DEFENSE_PER_DEF_SEED,
    AFFINITY_MULTIPLIER,
    # Tables
    StatTriple,
    Quality,
    QUALITY_MULTIPLIERS,
    ElementGrade,
    ELEMENT_GRADE_POINTS,
    ELEMENT_SOCKET_BONUSES,
    SpiritTier,
    SPIRIT_TIER_BONUSES,
    SpiritName,
    SpiritEffect,
    SPIRIT_EFFECTS,
    NO_SPIRIT_EFFECT,
    # Lookups
    quality_from_string,
    get_quality_multiplier,
    element_grade_from_string,
    get_element_socket_bonus,
    spirit_tier_from_string,
    spirit_name_from_string,
    get_spirit_effect,
)

from .errors import (
    ErrorKind,
    HeroConfigurationError,
    StudyLifecycleError,
)

from .sockets import (
    ElementSocket,
    SpiritSocket,
    parse_element_descriptor,
    parse_spirit_descriptor,
)

__all__ = [
    # Constants
    'EQUIPMENT_SLOT_COUNT',
    'SKILL_SLOT_COUNT',
    'EMPTY',
    'ATTACK_PER_HP_SEED',
    'DEFENSE_PER_DEF_SEED',
    'AFFINITY_MULTIPLIER',
    'StatTriple',
    'Quality',
    'QUALITY_MULTIPLIERS',
    'ElementGrade',
    'ELEMENT_GRADE_POINTS',
    'ELEMENT_SOCKET_BONUSES',
    'SpiritTier',
    'SPIRIT_TIER_BONUSES',
    'SpiritName',
    'SpiritEffect',
    'SPIRIT_EFFECTS',
    'NO_SPIRIT_EFFECT',
    'quality_from_string',
    'get_quality_multiplier',
    'element_grade_from_string',
    'get_element_socket_bonus',
    'spirit_tier_from_string',
    'spirit_name_from_string',
    'get_spirit_effect',
    # Errors
    'ErrorKind',
    'HeroConfigurationError',
    'StudyLifecycleError',
    # Sockets
    'ElementSocket',
    'SpiritSocket',
    'parse_element_descriptor',
    'parse_spirit_descriptor',
]
