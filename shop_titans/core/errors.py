"""
Shop Titans - Error Types
=========================
Errors raised while resolving heroes and running studies.

Configuration errors are data-authoring defects (unknown identifiers, malformed
socket descriptors). They are never defaulted: resolution of the offending hero
stops and the error propagates to whoever asked for it.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """What went wrong while resolving a hero."""
    UNKNOWN_CLASS = "unknown_class"
    UNKNOWN_ITEM = "unknown_item"
    DISALLOWED_CATEGORY = "disallowed_category"
    UNKNOWN_SKILL = "unknown_skill"
    UNKNOWN_INNATE_FAMILY = "unknown_innate_family"
    NO_QUALIFYING_INNATE_TIER = "no_qualifying_innate_tier"
    MALFORMED_DESCRIPTOR = "malformed_descriptor"
    UNKNOWN_QUALITY = "unknown_quality"
    UNKNOWN_ELEMENT_GRADE = "unknown_element_grade"
    UNKNOWN_SPIRIT_TIER = "unknown_spirit_tier"
    UNSUPPORTED_LEVEL = "unsupported_level"
    SLOT_COUNT = "slot_count"


class HeroConfigurationError(ValueError):
    """A hero configuration does not agree with the static game data."""

    def __init__(self, kind: ErrorKind, message: str, hero_id: Optional[str] = None):
        self.kind = kind
        self.hero_id = hero_id
        self.message = message
        prefix = f"[{kind.value}]"
        if hero_id:
            prefix += f" hero {hero_id}:"
        super().__init__(f"{prefix} {message}")

    def for_hero(self, hero_id: str) -> 'HeroConfigurationError':
        """Return a copy of this error attributed to a hero."""
        return HeroConfigurationError(self.kind, self.message, hero_id)


class StudyLifecycleError(RuntimeError):
    """A study operation was invoked out of lifecycle order."""


__all__ = [
    'ErrorKind',
    'HeroConfigurationError',
    'StudyLifecycleError',
]
