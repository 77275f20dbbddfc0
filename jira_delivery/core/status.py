"""Status categorization utilities.

Builds on the status vocabulary in models.py. Matching is exact and
case-sensitive, so a status Jira reports as "in progress" is not active.
"""

from __future__ import annotations

from .models import ACTIVE_STATUSES, IssueStatus

# Statuses that close an issue for delivery purposes
TERMINAL_STATUSES: frozenset[IssueStatus] = frozenset({IssueStatus.DONE, IssueStatus.OBSOLETE})

# Canonical display order for status summaries
STATUS_DISPLAY_ORDER: tuple[str, ...] = (
    IssueStatus.IN_PROGRESS.value,
    IssueStatus.CODE_REVIEW.value,
    IssueStatus.QE_REVIEW.value,
    IssueStatus.FEATURE_COMPLETE.value,
    IssueStatus.DONE.value,
    IssueStatus.OBSOLETE.value,
)


def clean_status_name(value: str | None) -> str:
    """Sanitize a status string, converting null-like values to "Unknown".

    Parameters
    ----------
    value : str | None
        Raw status name.

    Returns
    -------
    str
        Stripped status name or "Unknown" for empty/null values.
    """
    if not value:
        return "Unknown"
    text = str(value).strip()
    if not text or text.lower() in {"nan", "none", "null"}:
        return "Unknown"
    return text


def map_status_category(value: str | None) -> str:
    """Map a status to a high-level category.

    - "Active": In Progress, Feature Complete, Code Review, QE Review
    - "Closed": Done, Obsolete
    - "Other": anything else, including unset statuses
    """
    status = IssueStatus.from_name(value)
    if status in ACTIVE_STATUSES:
        return "Active"
    if status in TERMINAL_STATUSES:
        return "Closed"
    return "Other"


def is_terminal_status(value: str | None) -> bool:
    return IssueStatus.from_name(value) in TERMINAL_STATUSES
