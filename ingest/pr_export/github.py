from __future__ import annotations
import logging
import requests
from typing import Dict, Any, List
from .config import Configuration

log = logging.getLogger(__name__)

USER_AGENT = "GitHub-PR-Stats-Script"


class RemoteApiError(Exception):
    """A non-200 answer from the GitHub API. Always fatal for the run."""

    def __init__(self, status: int, body: str, url: str = ""):
        super().__init__(f"{status} - {body}")
        self.status = status
        self.body = body
        self.url = url


class GitHubClient:
    def __init__(self, config: Configuration, session: requests.Session | None = None):
        self.s = session or requests.Session()
        self.s.headers.update({
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        })
        if config.token:
            self.s.headers["Authorization"] = f"token {config.token}"
        self.config = config

    def close(self):
        self.s.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(self, url: str, **kwargs) -> requests.Response:
        # no retry: anything but 200 aborts the whole run
        log.debug("GET %s %s", url, kwargs.get("params") or "")
        resp = self.s.get(url, timeout=self.config.timeout, **kwargs)
        if resp.status_code != 200:
            raise RemoteApiError(resp.status_code, resp.text, url)
        return resp

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.config.api_base}/repos/{owner}/{repo}"

    def list_closed_pulls(self, owner: str, repo: str, page: int, per_page: int) -> List[Dict[str, Any]]:
        params = {"state": "closed", "per_page": per_page, "page": page}
        return self._request(f"{self._repo_url(owner, repo)}/pulls", params=params).json() or []

    def get_pull(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        return self._request(f"{self._repo_url(owner, repo)}/pulls/{number}").json()
