from datetime import datetime, timezone

import pytest

from utui.models import (
    IssueComment,
    PullRequest,
    Repository,
    Review,
    ReviewComment,
    UnifiedComment,
)


def test_pull_request_from_search_json():
    data = {
        "number": 42,
        "title": "Add feature",
        "updatedAt": "2024-05-01T10:00:00Z",
        "repository": {"nameWithOwner": "octo/widgets"},
    }
    pr = PullRequest.from_dict(data)
    assert pr.number == 42
    assert pr.title == "Add feature"
    assert pr.updated_at == "2024-05-01T10:00:00Z"
    assert pr.repository == Repository(name="octo/widgets")


def test_pull_request_missing_fields_use_zero_values():
    pr = PullRequest.from_dict({})
    assert pr == PullRequest(number=0, title="", updated_at="", repository=Repository(""))


def test_issue_comment_from_dict():
    data = {"body": "hello", "created_at": "2024-01-01T00:00:00Z", "user": {"login": "alice"}}
    c = IssueComment.from_dict(data)
    assert (c.body, c.created_at, c.user) == ("hello", "2024-01-01T00:00:00Z", "alice")


@pytest.mark.parametrize("data", [{"body": "x"}, {"body": "x", "user": None}, {"body": "x", "user": {}}])
def test_missing_user_gives_empty_login(data):
    assert IssueComment.from_dict(data).user == ""
    assert ReviewComment.from_dict(data).user == ""
    assert Review.from_dict(data).user == ""


def test_review_from_dict():
    data = {
        "body": "LGTM",
        "submitted_at": "2024-02-03T04:05:06Z",
        "state": "APPROVED",
        "user": {"login": "bob"},
    }
    r = Review.from_dict(data)
    assert r == Review(body="LGTM", submitted_at="2024-02-03T04:05:06Z", state="APPROVED", user="bob")


def test_review_comment_from_dict_ignores_extra_keys():
    data = {"body": "nit", "created_at": "t", "user": {"login": "carol", "id": 7}, "path": "a.py"}
    assert ReviewComment.from_dict(data) == ReviewComment(body="nit", created_at="t", user="carol")


def test_null_body_becomes_empty_string():
    assert Review.from_dict({"body": None, "state": None}).body == ""
    assert Review.from_dict({"body": None, "state": None}).state == ""


def test_unified_comment_holds_values():
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)
    c = UnifiedComment(user="dave", body="b", created_at=when)
    assert c.created_at == when
    with pytest.raises(AttributeError):
        c.user = "eve"  # type: ignore[misc]