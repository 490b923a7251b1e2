"""
Shared fixtures: a canned GitHub API that records every call it serves.
"""

import pytest

from ingest.pr_export.config import Configuration
from ingest.pr_export.github import RemoteApiError


def make_pr(number, merged=True, merged_by="maintainer", name=None,
            created_at="2024-01-01T00:00:00Z", merged_at="2024-01-01T02:30:00Z"):
    """A detail-endpoint shaped pull request."""
    pr = {
        "number": number,
        "title": f"Change #{number}",
        "user": {"login": f"author{number}"},
        "merged_by": {"login": merged_by} if merged_by else None,
        "additions": 10 * number,
        "deletions": number,
        "created_at": created_at,
        "merged_at": merged_at if merged else None,
    }
    if name:
        pr["user"]["name"] = name
    return pr


class FakeClient:
    """Serves list pages from `pages` (page 1 first) and details by number."""

    def __init__(self, pages, fail_on=None):
        self.pages = pages
        self.fail_on = fail_on or {}
        self.list_calls = []
        self.detail_calls = []
        self.closed = False

    def list_closed_pulls(self, owner, repo, page, per_page):
        self.list_calls.append((owner, repo, page, per_page))
        if ("list", page) in self.fail_on:
            raise RemoteApiError(self.fail_on[("list", page)], "boom", "list")
        return self.pages[page - 1] if page <= len(self.pages) else []

    def get_pull(self, owner, repo, number):
        self.detail_calls.append(number)
        if ("detail", number) in self.fail_on:
            raise RemoteApiError(self.fail_on[("detail", number)], "boom", "detail")
        for page in self.pages:
            for pr in page:
                if pr["number"] == number:
                    return dict(pr)
        raise AssertionError(f"unexpected detail call for #{number}")

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's shell or .env from leaking into tests."""
    for var in ("GITHUB_TOKEN", "GITHUB_TIMEOUT", "GITHUB_API_URL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config():
    return Configuration(owner="octo", repo="demo", page_size=3, max_prs=100)


@pytest.fixture
def pr_factory():
    return make_pr


@pytest.fixture
def fake_client():
    return FakeClient
