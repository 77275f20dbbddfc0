"""Domain data models for Jira issues, approvals, and comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .collection import IssueCollection

# Story points value meaning "not estimated"
NO_STORY_POINTS = 0


class _Vocabulary(str, Enum):
    """Closed set of display names, matched exactly (case-sensitive)."""

    @classmethod
    def from_name(cls, name: str | None):
        if name is None:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


class IssueType(_Vocabulary):
    INITIATIVE = "Initiative"
    EPIC = "Epic"
    STORY = "Story"
    TASK = "Task"


class IssueStatus(_Vocabulary):
    DONE = "Done"
    OBSOLETE = "Obsolete"
    IN_PROGRESS = "In Progress"
    FEATURE_COMPLETE = "Feature Complete"
    CODE_REVIEW = "Code Review"
    QE_REVIEW = "QE Review"


class IssueResolution(_Vocabulary):
    DONE = "Done"


class IssuePriority(_Vocabulary):
    UNPRIORITIZED = "Unprioritized"


# Statuses in which an issue is being worked on
ACTIVE_STATUSES: frozenset[IssueStatus] = frozenset(
    {
        IssueStatus.IN_PROGRESS,
        IssueStatus.FEATURE_COMPLETE,
        IssueStatus.CODE_REVIEW,
        IssueStatus.QE_REVIEW,
    }
)


@dataclass(slots=True)
class IssueApprovals:
    development: bool = False
    product: bool = False
    quality: bool = False
    experience: bool = False
    documentation: bool = False
    support: bool = False

    def approved(self) -> bool:
        """Return True when every delivery gate is signed off.

        Support sign-off is tracked but not required.
        """
        return (
            self.development
            and self.product
            and self.quality
            and self.experience
            and self.documentation
        )


@dataclass(slots=True)
class Comment:
    raw: dict[str, Any]
    created: datetime | None = None
    updated: datetime | None = None

    @property
    def author(self) -> str | None:
        return (self.raw.get("author") or {}).get("displayName")

    @property
    def body(self) -> str | None:
        return self.raw.get("body")


def _empty_collection() -> IssueCollection:
    from .collection import IssueCollection

    return IssueCollection()


@dataclass(slots=True, eq=False)
class Issue:
    """A fetched Jira issue plus the derived facts this package tracks.

    ``raw`` is the issue JSON as returned by the Jira client and is never
    modified here. Every classification method is a pure function of the
    current field state and answers conservatively when a field is absent.
    """

    raw: dict[str, Any]
    link: str = ""
    parent_link: str = ""
    linked_issues: IssueCollection = field(default_factory=_empty_collection)
    story_points: int = NO_STORY_POINTS
    approvals: IssueApprovals = field(default_factory=IssueApprovals)
    qa_contact: str = ""
    acceptance: str = ""
    owner: str = ""
    impediment: bool = False
    comments: list[Comment] = field(default_factory=list)

    # ------------------ Raw Field Access ------------------
    @property
    def fields(self) -> dict[str, Any]:
        return self.raw.get("fields") or {}

    @property
    def key(self) -> str | None:
        return self.raw.get("key")

    def _field_name(self, name: str) -> str | None:
        value = self.fields.get(name)
        if value is None:
            return None
        if isinstance(value, dict):
            return value.get("name") or ""
        return str(value)

    @property
    def status_name(self) -> str | None:
        return self._field_name("status")

    @property
    def type_name(self) -> str | None:
        return self._field_name("issuetype")

    @property
    def resolution_name(self) -> str | None:
        return self._field_name("resolution")

    @property
    def priority_name(self) -> str | None:
        return self._field_name("priority")

    @property
    def components(self) -> list[str] | None:
        value = self.fields.get("components")
        if value is None:
            return None
        return [c.get("name") for c in value if isinstance(c, dict)]

    # ------------------ Classification ------------------
    def is_active(self) -> bool:
        return IssueStatus.from_name(self.status_name) in ACTIVE_STATUSES

    def is_type(self, tp: IssueType | str) -> bool:
        name = self.type_name
        return name is not None and name == tp

    def in_status(self, status: IssueStatus | str) -> bool:
        name = self.status_name
        return name is not None and name == status

    def is_resolved(self) -> bool:
        name = self.resolution_name
        return name is not None and name == IssueResolution.DONE

    def is_prioritized(self) -> bool:
        # An absent priority field counts as prioritized; only an explicit
        # empty or "Unprioritized" value does not.
        name = self.priority_name
        if name is None:
            return True
        return name not in ("", IssuePriority.UNPRIORITIZED)

    def has_story_points(self) -> bool:
        return self.story_points > NO_STORY_POINTS

    def has_component(self, component: str) -> bool:
        components = self.components
        if components is None:
            return False
        return component in components
