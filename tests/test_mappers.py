from datetime import datetime

from jira_delivery.core.config import FIELD_IDS
from jira_delivery.core.mappers import (
    extract_delivery_owner,
    issues_to_dataframe,
    map_approvals,
    map_issue,
    map_story_points,
    parse_dt,
)
from jira_delivery.core.models import NO_STORY_POINTS

SERVER = "https://example.atlassian.net"


def _raw_epic():
    return {
        "key": "PROJ-10",
        "fields": {
            "summary": "Epic",
            "description": "Scope\nDelivery Owner: [~jdoe]\n",
            "status": {"name": "In Progress"},
            "issuetype": {"name": "Epic"},
            "priority": {"name": "Major"},
            "parent": {"key": "PROJ-1"},
            FIELD_IDS["story_points"]: 8.0,
            FIELD_IDS["approvals"]: [{"value": "Development"}, {"value": "Support"}],
            FIELD_IDS["qa_contact"]: {"displayName": "QA Person"},
            FIELD_IDS["acceptance"]: "It works",
            FIELD_IDS["flagged"]: [{"value": "Impediment"}],
            "issuelinks": [
                {"outwardIssue": {"key": "PROJ-11", "fields": {"status": {"name": "Done"}}}},
                {"inwardIssue": {"key": "PROJ-12", "fields": {"status": {"name": "QE Review"}}}},
                {"type": {"name": "Blocks"}},
            ],
            "comment": {
                "comments": [
                    {
                        "author": {"displayName": "Alice"},
                        "body": "hello",
                        "created": "2024-09-01T10:00:00.000+0000",
                        "updated": "2024-09-02T10:00:00.000+0000",
                    }
                ]
            },
        },
    }


def test_map_issue_derived_attributes():
    issue = map_issue(_raw_epic(), server=SERVER, field_ids=FIELD_IDS)
    assert issue.key == "PROJ-10"
    assert issue.link == f"{SERVER}/browse/PROJ-10"
    assert issue.parent_link == f"{SERVER}/browse/PROJ-1"
    assert issue.story_points == 8
    assert issue.approvals.development and issue.approvals.support
    assert not issue.approvals.approved()
    assert issue.qa_contact == "QA Person"
    assert issue.acceptance == "It works"
    assert issue.owner == "jdoe"
    assert issue.impediment
    assert issue.is_active()


def test_map_issue_linked_issues_and_comments():
    issue = map_issue(_raw_epic(), server=SERVER, field_ids=FIELD_IDS)
    assert issue.linked_issues.keys() == ["PROJ-11", "PROJ-12"]
    assert issue.linked_issues[0].in_status("Done")
    assert issue.linked_issues[1].is_active()
    assert issue.linked_issues[0].link == f"{SERVER}/browse/PROJ-11"
    assert len(issue.comments) == 1
    comment = issue.comments[0]
    assert comment.author == "Alice"
    assert comment.body == "hello"
    assert isinstance(comment.created, datetime)
    assert comment.updated > comment.created


def test_map_issue_minimal_payload():
    issue = map_issue({"key": "PROJ-2", "fields": {}}, field_ids=FIELD_IDS)
    assert issue.link == ""
    assert issue.story_points == NO_STORY_POINTS
    assert issue.owner == ""
    assert not issue.impediment
    assert len(issue.linked_issues) == 0
    assert issue.comments == []


def test_owner_field_wins_over_description():
    raw = _raw_epic()
    raw["fields"][FIELD_IDS["owner"]] = {"displayName": "Field Owner"}
    assert map_issue(raw, field_ids=FIELD_IDS).owner == "Field Owner"


def test_extract_delivery_owner():
    assert extract_delivery_owner("DELIVERY OWNER: [~abc123]") == "abc123"
    assert extract_delivery_owner("*Delivery Owner*: [~mjones]") == "mjones"
    assert extract_delivery_owner("Owner: [~nobody]") == ""
    assert extract_delivery_owner(None) == ""


def test_map_story_points():
    assert map_story_points(None) == NO_STORY_POINTS
    assert map_story_points("5") == 5
    assert map_story_points(3.0) == 3
    assert map_story_points(-1) == NO_STORY_POINTS
    assert map_story_points("n/a") == NO_STORY_POINTS
    assert map_story_points("inf") == NO_STORY_POINTS
    assert map_story_points(float("-inf")) == NO_STORY_POINTS
    assert map_story_points(float("nan")) == NO_STORY_POINTS


def test_map_approvals_all_gates():
    value = [{"value": v} for v in ("Development", "Product", "Quality", "Experience", "Documentation")]
    approvals = map_approvals(value)
    assert approvals.approved()
    assert not approvals.support
    assert not map_approvals(None).approved()


def test_parse_dt():
    assert parse_dt(None) is None
    assert parse_dt("not a date") is None
    ts = parse_dt("2024-09-01T10:00:00.000+0000")
    assert ts.tzinfo is not None
    assert ts.year == 2024


def test_issues_to_dataframe():
    issue = map_issue(_raw_epic(), server=SERVER, field_ids=FIELD_IDS)
    df = issues_to_dataframe([issue])
    assert df.loc[0, "key"] == "PROJ-10"
    assert df.loc[0, "owner"] == "jdoe"
    assert df.loc[0, "resolution"] == "Unresolved"
    assert bool(df.loc[0, "impediment"]) is True
