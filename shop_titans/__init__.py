"""
Shop Titans - Hero Study Engine
===============================
Resolves hero stats from class, gear, sockets and skills, and ranks hero
variations with runoff-scored studies.
"""

from .game_data import GameData, load_game_data
from .hero_builder import Hero, SimHero, resolve_hero
from .studies import Study, StudyResult, StudyStatus, Variation

__all__ = [
    'GameData',
    'load_game_data',
    'Hero',
    'SimHero',
    'resolve_hero',
    'Study',
    'StudyResult',
    'StudyStatus',
    'Variation',
]
