"""
Shop Titans - Studies
=====================
A study is a plan for generating and ranking trials: every variation (a team of
hero configurations) is resolved, run ``simulation_qty`` times against an
encounter tier, and scored by its success rate.

Runoff scoring:
- The top ``runoff_scoring_threshold`` percent of a tier's ranking is re-tested
  on the next, harder tier.
- This repeats until no retained variation succeeded or the tiers run out.
- A threshold of 100 disables runoff: only the first tier is run and every
  variation is kept.

Trials inside a tier are independent and may run in parallel (``max_workers``).
Tiers are strictly sequential: ranking waits for every trial of the tier.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .core.errors import StudyLifecycleError
from .game_data import GameData
from .hero_builder import Hero, SimHero, build_sim_team

logger = logging.getLogger(__name__)

# executor(team, tier) -> outcome of one trial (True/False or a 0-1 score)
TrialExecutor = Callable[[List[SimHero], Any], Union[bool, float]]

RUNOFF_DISABLED_THRESHOLD = 100.0


class StudyStatus(Enum):
    """Study lifecycle. Transitions only move forward."""
    CREATED = "created"
    RUNNING = "running"
    FINISHED = "finished"


_STATUS_ORDER = [StudyStatus.CREATED, StudyStatus.RUNNING, StudyStatus.FINISHED]


@dataclass
class Variation:
    """One concrete team configuration evaluated by a study."""
    identifier: str
    heroes: List[Hero]
    description: str = ""


@dataclass
class VariationScore:
    """Aggregate trial results for one variation on one tier."""
    variation: Variation
    score: float
    successes: int
    trials: int

    @property
    def identifier(self) -> str:
        return self.variation.identifier


@dataclass
class TierResult:
    """Ranking for one tier and the variations carried forward from it."""
    tier_index: int
    tier: Any
    ranked: List[VariationScore]
    retained: List[VariationScore]


@dataclass
class StudyResult:
    """Outcome of a finished study."""
    study_id: str
    tier_results: List[TierResult] = field(default_factory=list)

    @property
    def final_tier_index(self) -> int:
        """Index of the last tier tested (-1 if none was)."""
        return self.tier_results[-1].tier_index if self.tier_results else -1

    @property
    def final_tier(self) -> Any:
        return self.tier_results[-1].tier if self.tier_results else None

    @property
    def survivors(self) -> List[VariationScore]:
        """Variations retained after the last tier, best first."""
        return list(self.tier_results[-1].retained) if self.tier_results else []

    @property
    def survivor_scores(self) -> Dict[str, float]:
        return {s.identifier: s.score for s in self.survivors}


def calculate_retained_count(candidate_count: int, threshold: float) -> int:
    """
    How many variations survive a runoff.

    Top ``threshold`` percent, rounded up so a non-empty tier keeps at least
    one variation (10 at 50% -> 5, 3 at 50% -> 2).
    """
    if threshold >= RUNOFF_DISABLED_THRESHOLD:
        return candidate_count
    # Rounding to 9 places keeps exact products (10 * 50 / 100) from rounding up
    count = math.ceil(round(candidate_count * threshold / 100.0, 9))
    if candidate_count > 0:
        count = max(1, count)
    return min(candidate_count, count)


def rank_scores(scores: Sequence[VariationScore]) -> List[VariationScore]:
    """Best score first. Ties keep enumeration order."""
    return sorted(scores, key=lambda s: s.score, reverse=True)


def select_runoff_survivors(ranked: Sequence[VariationScore],
                            threshold: float) -> List[VariationScore]:
    """Keep the top ``threshold`` percent of an already-ranked list."""
    return list(ranked[:calculate_retained_count(len(ranked), threshold)])


@dataclass
class Study:
    """
    Plan for generating and ranking trials.

    Args:
        identifier: Short unique name
        description: Human readable description
        simulation_qty: Trials per variation per tier
        runoff_scoring_threshold: Percent (0-100] of top variations re-tested on
            the next tier. Pass 100.0 to disable runoff scoring.
        game_data: Static tables needed to resolve every variation
    """
    identifier: str
    description: str
    simulation_qty: int
    runoff_scoring_threshold: float
    game_data: GameData
    status: StudyStatus = StudyStatus.CREATED

    def __post_init__(self):
        if self.simulation_qty < 1:
            raise ValueError(f"simulation_qty must be at least 1, got {self.simulation_qty}")
        if not 0 < self.runoff_scoring_threshold <= RUNOFF_DISABLED_THRESHOLD:
            raise ValueError(
                f"runoff_scoring_threshold must be in (0, 100], got {self.runoff_scoring_threshold}"
            )

    @property
    def runoff_enabled(self) -> bool:
        return self.runoff_scoring_threshold < RUNOFF_DISABLED_THRESHOLD

    def _transition(self, new_status: StudyStatus) -> None:
        if _STATUS_ORDER.index(new_status) != _STATUS_ORDER.index(self.status) + 1:
            raise StudyLifecycleError(
                f"Study {self.identifier} cannot move from {self.status.value} to {new_status.value}"
            )
        self.status = new_status

    # -------------------------------------------------------------------------
    # Trials
    # -------------------------------------------------------------------------

    def score_variation(self, variation: Variation, tier: Any,
                        executor: TrialExecutor) -> VariationScore:
        """Resolve a variation's team and run ``simulation_qty`` trials."""
        team = build_sim_team(variation.heroes, self.game_data)
        outcomes = [float(executor(team, tier)) for _ in range(self.simulation_qty)]
        return VariationScore(
            variation=variation,
            score=sum(outcomes) / self.simulation_qty,
            successes=sum(1 for o in outcomes if o > 0),
            trials=self.simulation_qty,
        )

    def score_tier(self, candidates: Sequence[Variation], tier: Any,
                   executor: TrialExecutor,
                   max_workers: Optional[int] = None) -> List[VariationScore]:
        """Score every candidate on one tier. Returns scores in candidate order."""
        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                return list(pool.map(lambda v: self.score_variation(v, tier, executor), candidates))
        return [self.score_variation(v, tier, executor) for v in candidates]

    # -------------------------------------------------------------------------
    # Runoff
    # -------------------------------------------------------------------------

    def run(self, variations: Sequence[Variation], tiers: Sequence[Any],
            executor: TrialExecutor, max_workers: Optional[int] = None) -> StudyResult:
        """
        Run the study to completion.

        Args:
            variations: Candidate variations (from a variation generator)
            tiers: Encounter tiers, easiest first
            executor: Called once per trial with (resolved team, tier)
            max_workers: Score variations of a tier on this many threads

        Raises:
            StudyLifecycleError: if the study was already run
            HeroConfigurationError: if any variation fails to resolve. The study
                stays RUNNING; a bad variation means a bad generator.
        """
        if self.status is not StudyStatus.CREATED:
            raise StudyLifecycleError(
                f"Study {self.identifier} is {self.status.value}; only a created study can run"
            )
        self._transition(StudyStatus.RUNNING)
        logger.info("Study %s started: %d variations, %d tiers, %d trials each",
                    self.identifier, len(variations), len(tiers), self.simulation_qty)

        result = StudyResult(study_id=self.identifier)
        candidates = list(variations)

        for tier_index, tier in enumerate(tiers):
            if not candidates:
                break

            ranked = rank_scores(self.score_tier(candidates, tier, executor, max_workers))
            retained = select_runoff_survivors(ranked, self.runoff_scoring_threshold)
            result.tier_results.append(TierResult(tier_index, tier, ranked, retained))
            logger.info("Study %s tier %d: %d tested, %d retained, best score %.3f",
                        self.identifier, tier_index, len(ranked), len(retained),
                        ranked[0].score if ranked else 0.0)

            if not self.runoff_enabled:
                break
            if not any(s.successes > 0 for s in retained):
                logger.warning("Study %s: no successes on tier %d, stopping runoff",
                               self.identifier, tier_index)
                break
            candidates = [s.variation for s in retained]

        self._transition(StudyStatus.FINISHED)
        logger.info("Study %s finished at tier %d with %d survivors",
                    self.identifier, result.final_tier_index, len(result.survivors))
        return result


__all__ = [
    'TrialExecutor',
    'RUNOFF_DISABLED_THRESHOLD',
    'StudyStatus',
    'Variation',
    'VariationScore',
    'TierResult',
    'StudyResult',
    'Study',
    'calculate_retained_count',
    'rank_scores',
    'select_runoff_survivors',
]
