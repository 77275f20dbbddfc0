"""IssueService: orchestrates fetching and mapping into issue collections."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .collection import IssueCollection
from .config import COMMENT_PAGE_SIZE_GUESS, JIRA_FETCH_BASE_FIELDS, SETTINGS
from .errors import AuthenticationError
from .field_config import custom_field_ids, load_field_ids
from .jira_client import JiraAPI
from .mappers import map_issue, map_issues
from .models import Issue

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


class IssueService:
    def __init__(self, api: JiraAPI):
        self.api = api

    def fetch_fields(self) -> list[str]:
        return list(JIRA_FETCH_BASE_FIELDS) + custom_field_ids()

    # ------------------ Fetch Methods ------------------
    def fetch_issues(
        self,
        jql: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> IssueCollection:
        """Run ``jql`` and map every result into an :class:`IssueCollection`.

        Results keep the order Jira returned them in.
        """
        if progress:
            progress(f"Querying issues: {jql}", None, None)
        raw = self.api.search_raw(
            jql,
            fields=self.fetch_fields(),
            page_size=SETTINGS.search_page_size,
        )
        if SETTINGS.hydrate_comments:
            self._inflate_truncated_comments(raw, progress=progress)
        return map_issues(raw, server=self.api.server, field_ids=load_field_ids())

    def fetch_project_open(
        self,
        project_key: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> IssueCollection:
        jql = f"project = {project_key} AND statusCategory != Done"
        return self.fetch_issues(jql, progress=progress)

    def fetch_epic_issues(
        self,
        epic_key: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> IssueCollection:
        jql = f'"Epic Link" = {epic_key} OR parent = {epic_key}'
        return self.fetch_issues(jql, progress=progress)

    def fetch_issue(self, issue_key: str) -> Issue | None:
        raw = self.api.fetch_issue_raw(issue_key)
        if not raw:
            return None
        return map_issue(raw, server=self.api.server, field_ids=load_field_ids())

    def populate_linked_issues(self, issue: Issue) -> IssueCollection:
        """Replace the shallow linked issues of ``issue`` with full fetches.

        Links that cannot be fetched keep their shallow version.
        """
        full = IssueCollection.new(len(issue.linked_issues))
        for idx, linked in enumerate(issue.linked_issues):
            full[idx] = linked
            if linked is None or not linked.key:
                continue
            try:
                fetched = self.fetch_issue(linked.key)
            except AuthenticationError:
                raise
            except Exception as exc:
                logger.warning("Failed to fetch linked issue %s: %s", linked.key, exc)
                continue
            if fetched is not None:
                full[idx] = fetched
        issue.linked_issues = full
        return full

    # ------------------ Internal Comment Inflation ------------------
    def _inflate_truncated_comments(
        self,
        raw_issues: list[dict[str, Any]],
        *,
        progress: ProgressCallback | None = None,
    ) -> None:
        """Replace truncated comment arrays with full lists (in-place).

        Search results embed only the first page of comments but report the
        real count in ``fields.comment.total``; affected issues are re-fetched.
        """
        work: list[dict[str, Any]] = []
        for issue in raw_issues:
            comment_block = (issue.get("fields") or {}).get("comment") or {}
            comments_list = comment_block.get("comments") or []
            total = comment_block.get("total")
            if (isinstance(total, int) and total > len(comments_list)) or (
                total is None and len(comments_list) >= COMMENT_PAGE_SIZE_GUESS
            ):
                work.append(issue)
        if not work:
            return
        if progress:
            progress("Loading complete comment history", 0, len(work))
        for idx, issue in enumerate(work, start=1):
            self._hydrate_single_issue(issue)
            if progress:
                progress("Loading complete comment history", idx, len(work))

    def _hydrate_single_issue(self, issue: dict[str, Any]) -> None:
        key = issue.get("key")
        if not key:
            return
        fields = issue.get("fields") or {}
        comment_block = fields.get("comment") or {}
        comments_list = comment_block.get("comments") or []
        try:
            detail = self.api.fetch_issue_raw(key)
        except AuthenticationError:
            raise
        except Exception as exc:
            logger.warning("Failed to hydrate issue %s: %s", key, exc)
            return
        full_comments = ((detail.get("fields") or {}).get("comment") or {}).get("comments") or []
        if full_comments and len(full_comments) >= len(comments_list):
            comment_block["comments"] = full_comments
            comment_block["total"] = len(full_comments)
            fields["comment"] = comment_block
            issue["fields"] = fields
            logger.debug("Hydrated %s comments: %s -> %s", key, len(comments_list), len(full_comments))
