from jira_delivery.core.collection import IssueCollection
from jira_delivery.core.models import NO_STORY_POINTS, Issue


def _issue(key, points=NO_STORY_POINTS, status="In Progress"):
    return Issue(raw={"key": key, "fields": {"status": {"name": status}}}, story_points=points)


def _sample():
    return IssueCollection(
        [
            _issue("P-1", 3),
            _issue("P-2", NO_STORY_POINTS, status="Done"),
            _issue("P-3", 5),
            _issue("P-4", 2, status="Done"),
        ]
    )


def test_new_is_presized_with_empty_slots():
    c = IssueCollection.new(3)
    assert len(c) == 3
    assert list(c) == [None, None, None]
    assert len(IssueCollection.new(0)) == 0


def test_filter_always_true_keeps_order_and_elements():
    c = _sample()
    out = c.filter_by_function(lambda i: True)
    assert out == c
    assert out is not c
    assert [i.key for i in out] == ["P-1", "P-2", "P-3", "P-4"]


def test_filter_always_false_is_empty():
    out = _sample().filter_by_function(lambda i: False)
    assert len(out) == 0


def test_filter_does_not_mutate_source():
    c = _sample()
    out = c.filter_by_function(lambda i: i.is_active())
    assert out.keys() == ["P-1", "P-3"]
    assert len(c) == 4


def test_filter_hands_empty_slots_to_predicate():
    c = IssueCollection.new(2)
    c[1] = _issue("P-9")
    seen = []
    out = c.filter_by_function(lambda i: seen.append(i) or True)
    assert seen == [None, c[1]]
    assert out == c
    assert c.filter_by_function(lambda i: i is not None).keys() == ["P-9"]


def test_filter_always_true_on_unpopulated_collection():
    c = IssueCollection.new(2)
    out = c.filter_by_function(lambda i: True)
    assert out == c
    assert len(out) == 2


def test_story_points_sum():
    assert _sample().story_points() == 10
    assert IssueCollection().story_points() == 0
    assert IssueCollection.new(2).story_points() == 0


def test_shared_issue_across_collections():
    c = _sample()
    parent = Issue(raw={"key": "P-0", "fields": {}}, linked_issues=c.filter_by_function(lambda i: True))
    assert parent.linked_issues[0] is c[0]


def test_to_dataframe_columns():
    df = _sample().to_dataframe()
    assert list(df["key"]) == ["P-1", "P-2", "P-3", "P-4"]
    assert df["story_points"].sum() == 10
    assert df["active"].tolist() == [True, False, True, False]


def test_append_and_populate_slots():
    c = IssueCollection.new(1)
    c[0] = _issue("P-1", 2)
    c.append(_issue("P-2", 4))
    assert c.keys() == ["P-1", "P-2"]
    assert c.story_points() == 6
