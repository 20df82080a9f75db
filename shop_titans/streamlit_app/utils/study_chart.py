"""
Study Ranking Chart Components

Creates interactive Plotly charts for study results:
- Ranking of every variation tested on a tier, retained variations highlighted
- Runoff funnel showing how many variations survive each tier
"""

import plotly.graph_objects as go
from typing import List

from shop_titans.studies import StudyResult, TierResult

RETAINED_COLOR = 'rgba(76, 175, 80, 0.9)'   # Green
DROPPED_COLOR = 'rgba(128, 128, 128, 0.5)'  # Grey


def _tier_label(tier_result: TierResult) -> str:
    name = getattr(tier_result.tier, 'name', str(tier_result.tier))
    return f"Tier {tier_result.tier_index + 1}: {name}"


def create_tier_ranking_chart(
    tier_result: TierResult,
    max_bars: int = 25,
    height: int = 400,
) -> go.Figure:
    """
    Horizontal bar chart of success rates on one tier, best at the top.

    Args:
        tier_result: A TierResult from StudyResult.tier_results
        max_bars: Only the best ``max_bars`` variations are drawn
        height: Figure height in pixels

    Returns:
        Plotly Figure object ready for display with st.plotly_chart()
    """
    retained_ids = {s.identifier for s in tier_result.retained}
    shown = tier_result.ranked[:max_bars]

    # Reverse so the best variation ends up at the top of the axis
    labels = [s.identifier for s in reversed(shown)]
    values = [s.score * 100 for s in reversed(shown)]
    colors = [RETAINED_COLOR if s.identifier in retained_ids else DROPPED_COLOR
              for s in reversed(shown)]
    hover_texts = [
        f"<b>{s.identifier}</b><br>"
        f"Success rate: <b>{s.score * 100:.1f}%</b><br>"
        f"{s.successes}/{s.trials} trials<br>"
        f"{'Retained' if s.identifier in retained_ids else 'Dropped'}"
        for s in reversed(shown)
    ]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=values,
        y=labels,
        orientation='h',
        marker=dict(color=colors),
        hovertemplate='%{customdata}<extra></extra>',
        customdata=hover_texts,
        showlegend=False,
    ))

    fig.update_layout(
        title=_tier_label(tier_result),
        height=height,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis=dict(title="Success rate (%)", range=[0, 100]),
        yaxis=dict(automargin=True),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig


def create_runoff_funnel_chart(result: StudyResult, height: int = 300) -> go.Figure:
    """Funnel of variations tested per tier."""
    labels: List[str] = [_tier_label(t) for t in result.tier_results]
    counts: List[int] = [len(t.ranked) for t in result.tier_results]

    fig = go.Figure(go.Funnel(
        y=labels,
        x=counts,
        textinfo="value+percent initial",
        marker=dict(color=RETAINED_COLOR),
    ))
    fig.update_layout(
        title="Runoff",
        height=height,
        margin=dict(l=10, r=10, t=40, b=10),
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return fig
