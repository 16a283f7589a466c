"""Data records for pull requests and the comments attached to them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _login(data: Mapping[str, Any]) -> str:
    user = data.get("user") or {}
    return str(user.get("login") or "")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Repository:
    """A repository identified by its ``owner/name`` string."""

    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Repository:
        return cls(name=_text(data or {}, "nameWithOwner"))


@dataclass(frozen=True)
class PullRequest:
    """A pull request as returned by a PR search."""

    number: int = 0
    title: str = ""
    updated_at: str = ""
    repository: Repository = field(default_factory=Repository)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PullRequest:
        return cls(
            number=int(data.get("number") or 0),
            title=_text(data, "title"),
            updated_at=_text(data, "updatedAt"),
            repository=Repository.from_dict(data.get("repository")),
        )


@dataclass(frozen=True)
class IssueComment:
    """A conversation comment on a pull request."""

    body: str = ""
    created_at: str = ""
    user: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueComment:
        return cls(
            body=_text(data, "body"),
            created_at=_text(data, "created_at"),
            user=_login(data),
        )


@dataclass(frozen=True)
class Review:
    """A submitted pull request review."""

    body: str = ""
    submitted_at: str = ""
    state: str = ""
    user: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Review:
        return cls(
            body=_text(data, "body"),
            submitted_at=_text(data, "submitted_at"),
            state=_text(data, "state"),
            user=_login(data),
        )


@dataclass(frozen=True)
class ReviewComment:
    """A line comment made as part of a review."""

    body: str = ""
    created_at: str = ""
    user: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReviewComment:
        return cls(
            body=_text(data, "body"),
            created_at=_text(data, "created_at"),
            user=_login(data),
        )


@dataclass(frozen=True)
class UnifiedComment:
    """A comment, review or review comment reduced to a common shape."""

    user: str
    body: str
    created_at: datetime