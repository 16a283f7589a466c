"""Merge, filter and order the different kinds of pull request comments."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from enum import Enum

from utui.models import IssueComment, Review, ReviewComment, UnifiedComment

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)


class ReviewState(str, Enum):
    """Review states that get a marker in front of the review body."""

    PENDING = "COMMENTED"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    DISMISSED = "DISMISSED"

    @property
    def emoji(self) -> str:
        return _STATE_EMOJI[self]


_STATE_EMOJI = {
    ReviewState.PENDING: "💬",
    ReviewState.APPROVED: "✅",
    ReviewState.CHANGES_REQUESTED: "❌",
    ReviewState.DISMISSED: "🚫",
}


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp; anything unparsable yields ``ZERO_TIME``."""
    match = _RFC3339.match(value or "")
    if not match:
        return ZERO_TIME
    year, month, day, hour, minute, second, frac, zulu, sign, off_h, off_m = match.groups()
    if zulu:
        tz = timezone.utc
    else:
        hours, minutes = int(off_h), int(off_m)
        if hours > 23 or minutes > 59:
            return ZERO_TIME
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if sign == "-" else offset)
    micro = int((frac or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micro, tzinfo=tz,
        )
    except ValueError:
        return ZERO_TIME


def convert_issue_comments(issue_comments: Iterable[IssueComment]) -> list[UnifiedComment]:
    """Turn issue comments into unified comments."""
    return [
        UnifiedComment(user=c.user, body=c.body, created_at=parse_timestamp(c.created_at))
        for c in issue_comments
    ]


def _review_body(review: Review) -> str:
    if not review.state:
        return review.body
    try:
        emoji = ReviewState(review.state).emoji
    except ValueError:
        return f"[State: {review.state}]\n{review.body}"
    return f"{emoji} [State: {review.state}]\n{review.body}"


def convert_pull_request_reviews(reviews: Iterable[Review]) -> list[UnifiedComment]:
    """Turn reviews into unified comments, prefixing the body with the review state."""
    return [
        UnifiedComment(
            user=r.user,
            body=_review_body(r),
            created_at=parse_timestamp(r.submitted_at),
        )
        for r in reviews
    ]


def convert_pull_request_review_comments(
    review_comments: Iterable[ReviewComment],
) -> list[UnifiedComment]:
    """Turn review comments into unified comments."""
    return [
        UnifiedComment(user=c.user, body=c.body, created_at=parse_timestamp(c.created_at))
        for c in review_comments
    ]


def filter_out_bots(comments: Iterable[UnifiedComment]) -> list[UnifiedComment]:
    """Drop comments whose author name contains "bot", ignoring case."""
    return [c for c in comments if "bot" not in c.user.lower()]


def sort_by_created_at_desc(comments: list[UnifiedComment]) -> None:
    """Sort comments in place, newest first."""
    comments.sort(key=lambda c: c.created_at, reverse=True)


def top_n(comments: list[UnifiedComment], n: int) -> list[UnifiedComment]:
    """Return the first ``n`` comments."""
    if n < 0:
        raise ValueError(f"n must not be negative: {n}")
    if n >= len(comments):
        return comments
    return comments[:n]