"""Jira API client wrapper (REST v2 search pagination + single-issue fetch)."""

from __future__ import annotations

import logging
from typing import Any

from jira import JIRA, JIRAError

from .errors import jira_return_error

logger = logging.getLogger(__name__)


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(basic_auth=(email, token), options={"server": self.server})

    def search_raw(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = 1000,
    ) -> list[dict[str, Any]]:
        """Run ``jql`` and return every matching issue as raw JSON.

        Raises :class:`AuthenticationError` when Jira answers 401/403 and
        ``RuntimeError`` for any other HTTP failure.
        """
        session = getattr(self.client, "_session", None)
        if session is None:
            raise RuntimeError("JIRA session unavailable")
        url = f"{self.server}/rest/api/2/search"
        params: dict[str, Any] = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        start_at = 0
        while True:
            qp = dict(params, startAt=start_at)
            try:
                resp = session.get(url, params=qp)
            except JIRAError as exc:
                # ResilientSession raises on any non-OK response
                err = jira_return_error(exc.response, exc)
                if err is exc:
                    raise RuntimeError(f"Search failed {exc.status_code}: {exc.text}") from exc
                raise err from exc
            if resp.status_code >= 400:
                error = RuntimeError(f"Search failed {resp.status_code}: {resp.text[:200]}")
                raise jira_return_error(resp, error)
            data = resp.json()
            issues = data.get("issues", [])
            out.extend(issues)
            start_at += len(issues)
            total = data.get("total")
            if not issues or (isinstance(total, int) and start_at >= total):
                break
        logger.debug("JQL %r returned %s issues", jql, len(out))
        return out

    def fetch_issue_raw(self, issue_key: str) -> dict[str, Any]:
        try:
            issue = self.client.issue(issue_key)
        except JIRAError as exc:
            err = jira_return_error(exc.response, exc)
            if err is exc:
                raise RuntimeError(f"Failed to fetch issue {issue_key}: {exc}") from exc
            raise err from exc
        if hasattr(issue, "raw"):
            return issue.raw
        if isinstance(issue, dict):
            return issue
        raise RuntimeError(f"Unexpected issue payload type for {issue_key}: {type(issue)!r}")
