"""Command line entry point: list your pull requests with their latest comments."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

from termcolor import colored

from utui.aggregator import (
    convert_issue_comments,
    convert_pull_request_review_comments,
    convert_pull_request_reviews,
    filter_out_bots,
    sort_by_created_at_desc,
    top_n,
)
from utui.githubapi import GitHubAPI, GitHubAPIError, RealGitHubClient, split_owner_repo

logger = logging.getLogger(__name__)

VALID_STATES = ("open", "closed")
SEPARATOR = "---"


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``utui`` command."""
    parser = argparse.ArgumentParser(
        prog="utui",
        description=(
            "View PR comments, reviews and discussions in a readable form. "
            "Fetches your pull requests and shows the latest comments from non-bot users."
        ),
    )
    parser.add_argument(
        "-r", "--repolimit", type=int, default=5, help="Number of PRs to fetch (default: 5)"
    )
    parser.add_argument(
        "-c",
        "--commentlimit",
        type=_non_negative_int,
        default=5,
        help="Number of comments to show per PR (default: 5)",
    )
    parser.add_argument(
        "-s", "--state", default="", help="State of pull requests to fetch: open or closed"
    )
    parser.add_argument("-v", "--reviewer", default="", help="Filter PRs by review-requested")
    parser.add_argument("-a", "--author", default="", help="Filter PRs by author")
    return parser


def _format_time(moment: datetime) -> str:
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def _color_enabled(out: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def run(client: GitHubAPI, options: argparse.Namespace, out: TextIO | None = None) -> int:
    """Fetch pull requests and print each with its latest comments; return an exit status."""
    out = sys.stdout if out is None else out
    state = options.state or ""
    reviewer = options.reviewer or ""
    author = options.author or ""

    if state and state not in VALID_STATES:
        logger.error("Invalid repository state: %s", state)
        return 1
    if not author and not reviewer:
        author = "@me"

    print(
        f"Fetching {options.repolimit} PRs and {options.commentlimit} comments, "
        f"repoState: {state or 'all'}, reviewer: {reviewer or 'any'}, "
        f"author: {author or 'any'} ",
        file=out,
    )

    try:
        prs = client.fetch_pull_requests(options.repolimit, author, state, reviewer)
    except GitHubAPIError as exc:
        logger.error("Error fetching PRs: %s", exc)
        return 1

    use_color = _color_enabled(out)

    def paint(text: object, color: str) -> str:
        return colored(str(text), color, force_color=True) if use_color else str(text)

    for pr in prs:
        print(
            f"{paint(pr.repository.name, 'light_blue')}#{paint(pr.number, 'light_green')} "
            f"{paint(pr.title, 'white')} (updated: {paint(pr.updated_at, 'light_yellow')})",
            file=out,
        )
        try:
            owner, repo = split_owner_repo(pr.repository.name)
        except ValueError:
            logger.error("Invalid repo name: %s", pr.repository.name)
            print(SEPARATOR, file=out)
            continue
        try:
            issue_cs, reviews, review_cs = client.fetch_all_comments_parallel(
                owner, repo, pr.number
            )
        except GitHubAPIError as exc:
            logger.error("Error fetching comments: %s", exc)
            print(SEPARATOR, file=out)
            continue

        comments = filter_out_bots(
            [
                *convert_issue_comments(issue_cs),
                *convert_pull_request_reviews(reviews),
                *convert_pull_request_review_comments(review_cs),
            ]
        )
        sort_by_created_at_desc(comments)
        for comment in top_n(comments, options.commentlimit):
            print(
                f"{paint(comment.user, 'cyan')} "
                f"({paint(_format_time(comment.created_at), 'light_yellow')}):\n{comment.body}",
                file=out,
            )
        print(SEPARATOR, file=out)
    return 0


def main(argv: Sequence[str] | None = None, client: GitHubAPI | None = None) -> int:
    """Parse arguments and run the command."""
    options = build_parser().parse_args(argv)
    if client is None:
        client = RealGitHubClient()
    return run(client, options, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())