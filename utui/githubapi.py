"""Access to GitHub: pull request search through the gh CLI, comments over REST."""

from __future__ import annotations

import json
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

import requests

from utui.models import IssueComment, PullRequest, Review, ReviewComment

API_URL = "https://api.github.com"
PER_PAGE = 100
REQUEST_TIMEOUT = 30
SEARCH_FIELDS = "number,title,updatedAt,repository"

T = TypeVar("T")

CommentSet = tuple[list[IssueComment], list[Review], list[ReviewComment]]


class GitHubAPIError(Exception):
    """Raised when data cannot be fetched from GitHub."""


class GitHubAPI(ABC):
    """What the command needs from GitHub: PR search and comment listing."""

    @abstractmethod
    def fetch_pull_requests(
        self, limit: int, author: str, state: str, reviewer: str
    ) -> list[PullRequest]:
        """Search pull requests."""

    @abstractmethod
    def fetch_issue_comments(self, owner: str, repo: str, number: int) -> list[IssueComment]:
        """List the conversation comments of a pull request."""

    @abstractmethod
    def fetch_pull_request_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        """List the reviews of a pull request."""

    @abstractmethod
    def fetch_pull_request_review_comments(
        self, owner: str, repo: str, number: int
    ) -> list[ReviewComment]:
        """List the review comments of a pull request."""

    @abstractmethod
    def fetch_all_comments_parallel(self, owner: str, repo: str, number: int) -> CommentSet:
        """Fetch all three kinds of comments of a pull request."""


def split_owner_repo(name_with_owner: str) -> tuple[str, str]:
    """Split an ``owner/repo`` string into its two parts."""
    parts = name_with_owner.split("/")
    if len(parts) != 2:
        raise ValueError(f"invalid repository format: {name_with_owner}")
    owner, repo = parts
    return owner, repo


def _run_gh(args: Sequence[str]) -> bytes:
    completed = subprocess.run(["gh", *args], capture_output=True, check=True)
    return completed.stdout


def get_github_token() -> str:
    """Return the token that ``gh auth token`` prints, or an empty string."""
    try:
        output = _run_gh(["auth", "token"])
    except (OSError, subprocess.CalledProcessError):
        return ""
    return output.decode("utf-8", errors="replace").strip()


def _load_json_list(raw: bytes | str) -> list[Mapping[str, Any]]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return data


class RealGitHubClient(GitHubAPI):
    """GitHub client that talks to the REST API and falls back to the gh CLI."""

    def __init__(self, token: str | None = None, session: requests.Session | None = None):
        if token is None:
            token = get_github_token()
        self.session = session if session is not None else requests.Session()
        self.session.headers["Accept"] = "application/vnd.github+json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def fetch_pull_requests(
        self, limit: int, author: str = "", state: str = "", reviewer: str = ""
    ) -> list[PullRequest]:
        """Search pull requests with ``gh search prs``."""
        args = ["search", "prs", "--limit", str(limit), "--json", SEARCH_FIELDS]
        if state:
            args += ["--state", state]
        if reviewer:
            args += ["--review-requested", reviewer]
        if author:
            args += ["--author", author]
        try:
            output = _run_gh(args)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise GitHubAPIError(f"failed to call gh CLI: {exc}") from exc
        try:
            items = _load_json_list(output)
        except ValueError as exc:
            raise GitHubAPIError(f"failed to unmarshal JSON: {exc}") from exc
        return [PullRequest.from_dict(item) for item in items]

    def fetch_issue_comments(self, owner: str, repo: str, number: int) -> list[IssueComment]:
        return self._fetch(
            f"repos/{owner}/{repo}/issues/{number}/comments",
            IssueComment.from_dict,
            "issue comments",
        )

    def fetch_pull_request_reviews(self, owner: str, repo: str, number: int) -> list[Review]:
        return self._fetch(
            f"repos/{owner}/{repo}/pulls/{number}/reviews",
            Review.from_dict,
            "pull request reviews",
        )

    def fetch_pull_request_review_comments(
        self, owner: str, repo: str, number: int
    ) -> list[ReviewComment]:
        return self._fetch(
            f"repos/{owner}/{repo}/pulls/{number}/comments",
            ReviewComment.from_dict,
            "review comments",
        )

    def fetch_all_comments_parallel(self, owner: str, repo: str, number: int) -> CommentSet:
        """Fetch issue comments, reviews and review comments concurrently.

        The first failure, in that order, is raised once all three are done.
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            issue_future = pool.submit(self.fetch_issue_comments, owner, repo, number)
            review_future = pool.submit(self.fetch_pull_request_reviews, owner, repo, number)
            review_comment_future = pool.submit(
                self.fetch_pull_request_review_comments, owner, repo, number
            )
        named = (
            ("issueComments", issue_future),
            ("reviews", review_future),
            ("reviewComments", review_comment_future),
        )
        for name, future in named:
            exc = future.exception()
            if exc is not None:
                raise GitHubAPIError(f"error fetching {name}: {exc}") from exc
        return issue_future.result(), review_future.result(), review_comment_future.result()

    def _fetch(
        self, path: str, parse: Callable[[Mapping[str, Any]], T], label: str
    ) -> list[T]:
        try:
            items = self._list_paginated(path)
        except (requests.RequestException, ValueError):
            items = self._list_with_cli(path, label)
        return [parse(item) for item in items]

    def _list_paginated(self, path: str) -> list[Mapping[str, Any]]:
        url: str | None = f"{API_URL}/{path}"
        params: dict[str, Any] | None = {"per_page": PER_PAGE}
        items: list[Mapping[str, Any]] = []
        while url:
            response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            page = response.json()
            if not isinstance(page, list):
                raise ValueError(f"expected a JSON array from {url}")
            items.extend(page)
            url = response.links.get("next", {}).get("url")
            params = None
        return items

    @staticmethod
    def _list_with_cli(path: str, label: str) -> list[Mapping[str, Any]]:
        try:
            output = _run_gh(["api", "--paginate", path])
        except (OSError, subprocess.CalledProcessError) as exc:
            raise GitHubAPIError(f"failed to fetch {label}: {exc}") from exc
        try:
            return _load_json_list(output)
        except ValueError as exc:
            raise GitHubAPIError(f"failed to decode {label}: {exc}") from exc