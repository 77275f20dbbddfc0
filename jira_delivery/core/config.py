"""Central configuration, constants, and Jira custom field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://issues.redhat.com"
TIMEZONE = "UTC"

# Status codes returned by Jira when basic authentication is rejected
AUTH_FAILURE_STATUS_CODES: frozenset[int] = frozenset({401, 403})

AUTHENTICATION_ERROR_MESSAGE = "Access Unauthorized: check basic authentication"

# =============================================================================
# Delivery Owner Extraction
# =============================================================================
# Matches "Delivery Owner: [~username]" in free text (description, comments)
DELIVERY_OWNER_REGEXP = r"\W*(Delivery Owner|DELIVERY OWNER)\W*:\W*\[~([a-zA-Z0-9]*)\]"

# =============================================================================
# Approvals
# =============================================================================
# Option values of the approvals multi-select field, mapped to the
# IssueApprovals attribute they set.
APPROVAL_OPTIONS: dict[str, str] = {
    "Development": "development",
    "Product": "product",
    "Quality": "quality",
    "Experience": "experience",
    "Documentation": "documentation",
    "Support": "support",
}

# Value of the "Flagged" field marking a blocked issue
IMPEDIMENT_FLAG = "Impediment"

# =============================================================================
# Jira Custom Field IDs
# =============================================================================
# Defaults; a fields.yaml next to the package overrides any of these keys.
FIELD_IDS = {
    "story_points": "customfield_12310243",
    "approvals": "customfield_12315941",
    "qa_contact": "customfield_12315948",
    "acceptance": "customfield_12311940",
    "owner": "customfield_12316346",
    "flagged": "customfield_12315950",
}

# Canonical field list for Jira fetches (custom fields appended at runtime)
JIRA_FETCH_BASE_FIELDS: Sequence[str] = (
    "summary",
    "description",
    "created",
    "updated",
    "status",
    "issuetype",
    "resolution",
    "priority",
    "components",
    "parent",
    "issuelinks",
    "comment",
)

# Search endpoint embeds at most this many comments per issue
COMMENT_PAGE_SIZE_GUESS = 20

ISSUE_CORE_COLUMNS: Sequence[str] = (
    "key",
    "summary",
    "issuetype",
    "status",
    "resolution",
    "priority",
    "story_points",
    "owner",
    "qa_contact",
    "approved",
    "impediment",
    "active",
    "link",
)


@dataclass(slots=True)
class AppSettings:
    search_page_size: int = 1000
    hydrate_comments: bool = True


SETTINGS = AppSettings()
