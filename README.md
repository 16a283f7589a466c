# utui

`utui` lists your GitHub pull requests. Under each one it prints the most
recent comments left by people, not bots. It gathers three kinds of feedback:
conversation comments, reviews and inline review comments. It merges them,
sorts them newest first and prints the top few.

## Requirements

- Python 3.10 or later
- The GitHub CLI (`gh`), installed and logged in. `utui` uses it in three ways:
  - `gh search prs` finds the pull requests.
  - `gh auth token` supplies the token for the REST API calls that list comments.
  - `gh api --paginate` takes over for any such call that fails.

## Installation

```
pip install .
```

## Usage

```
utui [-r N] [-c N] [-s open|closed] [-v USER] [-a USER]
```

| Option | Meaning | Default |
| --- | --- | --- |
| `-r`, `--repolimit` | Number of pull requests to fetch | 5 |
| `-c`, `--commentlimit` | Number of comments to show per pull request (not negative) | 5 |
| `-s`, `--state` | Only `open` or `closed` pull requests | all |
| `-v`, `--reviewer` | Pull requests where review is requested from this user | any |
| `-a`, `--author` | Pull requests written by this user | any |

If you give neither `--author` nor `--reviewer`, `utui` shows pull requests
you wrote (`--author @me`).

Examples:

```
utui
utui -s open -v @me -c 3
utui -a octocat -r 10
```

The command can also be started with `python -m utui.cli`.

### Output

`utui` first prints a line that restates the query:

```
Fetching 5 PRs and 5 comments, repoState: all, reviewer: any, author: @me
```

It then prints a header line for each pull request:

```
owner/repo#42 Fix the parser (updated: 2024-05-01T10:00:00Z)
```

Under the header come the latest comments. Each comment shows its author and its time, followed by its body on the lines after:

```
alice (2024-05-01 09:30:00):
Looks good to me.
```

A `---` line closes each pull request.

- A review starts with its state and a marker, such as `✅ [State: APPROVED]`.
  Other markers are 💬 for COMMENTED, ❌ for CHANGES_REQUESTED and 🚫 for DISMISSED.
  A state without a marker is shown as `[State: ...]` only.
- Comments whose author's login contains "bot", in any case, are left out.
- Output is coloured only when it goes to a terminal and `NO_COLOR` is not set.

### Errors

`utui` stops with exit status 1 in these cases:

- `--state` is given something other than `open` or `closed`.
- The pull request search fails.

Some errors affect only one pull request: its repository name is not of the
form `owner/repo`, or its comments cannot be fetched. In those cases the error
is logged, the pull request is closed with `---` and the next one is shown.

## Using it as a library

```python
from utui.githubapi import RealGitHubClient, split_owner_repo
from utui.aggregator import (
    convert_issue_comments,
    convert_pull_request_reviews,
    convert_pull_request_review_comments,
    filter_out_bots,
    sort_by_created_at_desc,
    top_n,
)

client = RealGitHubClient()
for pr in client.fetch_pull_requests(5, "@me", "open", ""):
    owner, repo = split_owner_repo(pr.repository.name)
    issue_comments, reviews, review_comments = client.fetch_all_comments_parallel(
        owner, repo, pr.number
    )
    comments = filter_out_bots(
        convert_issue_comments(issue_comments)
        + convert_pull_request_reviews(reviews)
        + convert_pull_request_review_comments(review_comments)
    )
    sort_by_created_at_desc(comments)
    for comment in top_n(comments, 3):
        print(comment.user, comment.created_at, comment.body)
```

`RealGitHubClient(token=None, session=None)` has two optional arguments:

- `token`: when it is not given, the client asks `gh auth token` for one.
- `session`: a `requests.Session` of your own.

The data records are in `utui.models`:

- `PullRequest`
- `Repository`
- `IssueComment`
- `Review`
- `ReviewComment`
- `UnifiedComment`

All records except `Repository` and `UnifiedComment` have a `from_dict` constructor that reads GitHub's JSON.

`utui.aggregator.parse_timestamp` reads RFC 3339 times. It returns
`ZERO_TIME` for anything it cannot parse.

Errors are raised as follows:

- Failures to fetch from GitHub raise `utui.githubapi.GitHubAPIError`.
- `split_owner_repo` raises `ValueError` for names that are not `owner/repo`.
- `top_n` raises `ValueError` for a negative count.

To plug in another data source, subclass `utui.githubapi.GitHubAPI`. You can pass an instance to `utui.cli.main(argv, client)` or `utui.cli.run(client, options, out)`.