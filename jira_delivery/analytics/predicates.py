"""Composable issue predicates for IssueCollection.filter_by_function.

Every predicate answers False for an empty collection slot.
"""

from __future__ import annotations

from collections.abc import Callable

from jira_delivery.core.models import Issue, IssueStatus, IssueType

Predicate = Callable[[Issue | None], bool]


def all_of(*predicates: Predicate) -> Predicate:
    def check(issue: Issue | None) -> bool:
        return issue is not None and all(p(issue) for p in predicates)

    return check


def any_of(*predicates: Predicate) -> Predicate:
    def check(issue: Issue | None) -> bool:
        return issue is not None and any(p(issue) for p in predicates)

    return check


def negate(predicate: Predicate) -> Predicate:
    def check(issue: Issue | None) -> bool:
        return issue is not None and not predicate(issue)

    return check


def is_type(tp: IssueType | str) -> Predicate:
    return lambda issue: issue is not None and issue.is_type(tp)


def in_status(status: IssueStatus | str) -> Predicate:
    return lambda issue: issue is not None and issue.in_status(status)


def has_component(component: str) -> Predicate:
    return lambda issue: issue is not None and issue.has_component(component)


def is_active(issue: Issue | None) -> bool:
    return issue is not None and issue.is_active()


def is_resolved(issue: Issue | None) -> bool:
    return issue is not None and issue.is_resolved()


def is_prioritized(issue: Issue | None) -> bool:
    return issue is not None and issue.is_prioritized()


def has_story_points(issue: Issue | None) -> bool:
    return issue is not None and issue.has_story_points()


def is_approved(issue: Issue | None) -> bool:
    return issue is not None and issue.approvals.approved()


def is_impeded(issue: Issue | None) -> bool:
    return issue is not None and issue.impediment


def has_owner(issue: Issue | None) -> bool:
    return issue is not None and bool(issue.owner)


unprioritized = negate(is_prioritized)
