"""Mapping raw Jira issue JSON into Issue instances."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd
import pytz

from .collection import IssueCollection
from .config import (
    APPROVAL_OPTIONS,
    DELIVERY_OWNER_REGEXP,
    IMPEDIMENT_FLAG,
    ISSUE_CORE_COLUMNS,
    TIMEZONE,
)
from .field_config import load_field_ids
from .models import NO_STORY_POINTS, Comment, Issue, IssueApprovals

_DELIVERY_OWNER_RE = re.compile(DELIVERY_OWNER_REGEXP)


def parse_dt(val: Any, tz: str = TIMEZONE) -> datetime | None:
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.tz_convert(pytz.timezone(tz)).to_pydatetime()


def extract_delivery_owner(text: str | None) -> str:
    """Return the user named in a "Delivery Owner: [~user]" line, or ""."""
    if not text:
        return ""
    match = _DELIVERY_OWNER_RE.search(text)
    if match is None:
        return ""
    return match.group(2)


def map_story_points(value: Any) -> int:
    if value is None:
        return NO_STORY_POINTS
    try:
        points = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return NO_STORY_POINTS
    if points < NO_STORY_POINTS:
        return NO_STORY_POINTS
    return points


def _option_values(value: Any) -> list[str]:
    # Multi-select / checkbox fields come back as [{"value": "..."}] lists
    if not value:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    out: list[str] = []
    for option in value:
        if isinstance(option, dict):
            text = option.get("value") or option.get("name")
        else:
            text = option
        if isinstance(text, str) and text:
            out.append(text)
    return out


def map_approvals(value: Any) -> IssueApprovals:
    approvals = IssueApprovals()
    for option in _option_values(value):
        attr = APPROVAL_OPTIONS.get(option)
        if attr:
            setattr(approvals, attr, True)
    return approvals


def _user_name(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("displayName") or value.get("name") or ""
    if isinstance(value, str):
        return value
    return ""


def map_comment(raw: dict[str, Any]) -> Comment:
    return Comment(raw=raw, created=parse_dt(raw.get("created")), updated=parse_dt(raw.get("updated")))


def _linked_raw(links: Any) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for link in links or []:
        if not isinstance(link, dict):
            continue
        target = link.get("outwardIssue") or link.get("inwardIssue")
        if isinstance(target, dict) and target.get("key"):
            out.append(target)
    return out


def map_issue(
    raw: dict[str, Any],
    server: str | None = None,
    field_ids: Mapping[str, str] | None = None,
) -> Issue:
    """Build an Issue from raw JSON, filling every derived attribute.

    ``server`` is the Jira base URL used for browse links; without it links
    stay empty. ``field_ids`` defaults to :func:`load_field_ids`.
    """
    ids = field_ids if field_ids is not None else load_field_ids()
    fields = raw.get("fields") or {}

    def custom(name: str) -> Any:
        field_id = ids.get(name)
        return fields.get(field_id) if field_id else None

    def browse(key: str | None) -> str:
        if not server or not key:
            return ""
        return f"{server.rstrip('/')}/browse/{key}"

    owner = _user_name(custom("owner")) or extract_delivery_owner(fields.get("description"))
    comments_raw = (fields.get("comment") or {}).get("comments", []) or []
    linked = IssueCollection(
        map_issue(target, server=server, field_ids=ids) for target in _linked_raw(fields.get("issuelinks"))
    )
    acceptance = custom("acceptance")

    return Issue(
        raw=raw,
        link=browse(raw.get("key")),
        parent_link=browse((fields.get("parent") or {}).get("key")),
        linked_issues=linked,
        story_points=map_story_points(custom("story_points")),
        approvals=map_approvals(custom("approvals")),
        qa_contact=_user_name(custom("qa_contact")),
        acceptance=acceptance if isinstance(acceptance, str) else "",
        owner=owner,
        impediment=IMPEDIMENT_FLAG in _option_values(custom("flagged")),
        comments=[map_comment(c) for c in comments_raw if isinstance(c, dict)],
    )


def map_issues(
    raw_issues: Iterable[dict[str, Any]],
    server: str | None = None,
    field_ids: Mapping[str, str] | None = None,
) -> IssueCollection:
    return IssueCollection(map_issue(r, server=server, field_ids=field_ids) for r in raw_issues)


def issues_to_dataframe(issues: Iterable[Issue]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "key": i.key,
                "summary": i.fields.get("summary"),
                "issuetype": i.type_name,
                "status": i.status_name,
                "resolution": i.resolution_name or "Unresolved",
                "priority": i.priority_name,
                "story_points": i.story_points,
                "owner": i.owner,
                "qa_contact": i.qa_contact,
                "approved": i.approvals.approved(),
                "impediment": i.impediment,
                "active": i.is_active(),
                "link": i.link,
            }
        )
    return pd.DataFrame(rows, columns=list(ISSUE_CORE_COLUMNS))
