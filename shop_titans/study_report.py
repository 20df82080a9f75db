"""
Study result export.
Flattens a StudyResult into one row per (tier, variation) and writes it as CSV.
"""
import csv
import io
from typing import Any, Dict, List

from .studies import StudyResult

RESULT_COLUMNS = [
    'study', 'tier_index', 'tier', 'rank', 'variation',
    'score', 'successes', 'trials', 'retained', 'description',
]


def _tier_name(tier: Any) -> str:
    return getattr(tier, 'name', str(tier))


def study_results_to_rows(result: StudyResult) -> List[Dict[str, Any]]:
    """One dict per variation per tier, in ranking order."""
    rows = []
    for tier_result in result.tier_results:
        retained_ids = {s.identifier for s in tier_result.retained}
        for rank, score in enumerate(tier_result.ranked, start=1):
            rows.append({
                'study': result.study_id,
                'tier_index': tier_result.tier_index,
                'tier': _tier_name(tier_result.tier),
                'rank': rank,
                'variation': score.identifier,
                'score': round(score.score, 4),
                'successes': score.successes,
                'trials': score.trials,
                'retained': score.identifier in retained_ids,
                'description': score.variation.description,
            })
    return rows


def export_study_results_csv(result: StudyResult) -> str:
    """
    Export study results to a CSV string for download.
    Returns the CSV content as a string.
    """
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=RESULT_COLUMNS)
    writer.writeheader()
    writer.writerows(study_results_to_rows(result))
    return output.getvalue()


def write_study_results_csv(result: StudyResult, filepath: str) -> None:
    """Write study results to a CSV file."""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_COLUMNS)
        writer.writeheader()
        writer.writerows(study_results_to_rows(result))
