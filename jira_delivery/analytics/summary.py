"""Delivery summaries over issue collections."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from jira_delivery.analytics import predicates as pr
from jira_delivery.core.collection import IssueCollection
from jira_delivery.core.models import IssueType
from jira_delivery.core.status import STATUS_DISPLAY_ORDER, clean_status_name


@dataclass(slots=True)
class DeliverySummary:
    """Counts and story-point totals for one collection of issues."""

    total: int = 0
    active: int = 0
    active_unprioritized: int = 0
    resolved: int = 0
    impeded: int = 0
    unestimated: int = 0
    approved: int = 0
    story_points: int = 0
    resolved_story_points: int = 0
    resolved_stories_story_points: int = 0


def build_summary(issues: IssueCollection) -> DeliverySummary:
    active = issues.filter_by_function(pr.is_active)
    resolved = issues.filter_by_function(pr.is_resolved)
    return DeliverySummary(
        total=len(issues.issues()),
        active=len(active),
        active_unprioritized=len(active.filter_by_function(pr.unprioritized)),
        resolved=len(resolved),
        impeded=len(issues.filter_by_function(pr.is_impeded)),
        unestimated=len(issues.filter_by_function(pr.negate(pr.has_story_points))),
        approved=len(issues.filter_by_function(pr.is_approved)),
        story_points=issues.story_points(),
        resolved_story_points=resolved.story_points(),
        resolved_stories_story_points=resolved.filter_by_function(pr.is_type(IssueType.STORY)).story_points(),
    )


def summary_by_status(issues: IssueCollection) -> pd.DataFrame:
    """Issue count and story points per status, in display order.

    Statuses outside the known order follow alphabetically.
    """
    df = issues.to_dataframe()
    if df.empty:
        return pd.DataFrame(columns=["status", "count", "story_points"])
    df["status"] = df["status"].apply(clean_status_name)
    agg = (
        df.groupby("status", dropna=False)
        .agg(count=("key", "count"), story_points=("story_points", "sum"))
        .reset_index()
    )
    known = [s for s in STATUS_DISPLAY_ORDER if s in set(agg["status"])]
    trailing = sorted(s for s in agg["status"] if s not in STATUS_DISPLAY_ORDER)
    order = {name: idx for idx, name in enumerate(known + trailing)}
    agg["_order"] = agg["status"].map(order)
    return agg.sort_values("_order").drop(columns="_order").reset_index(drop=True)
