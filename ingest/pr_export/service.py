import logging
from typing import Any, Dict, List, Optional
from .config import Configuration
from .github import GitHubClient

log = logging.getLogger(__name__)


def collect(config: Configuration, client: Optional[GitHubClient] = None) -> List[Dict[str, Any]]:
    """Walk closed PRs page by page and return the detail record of each merged one.

    The max_prs cap is only checked after a whole page is processed, so the
    result can overshoot it by the merged items of the last page.
    RemoteApiError from the client propagates untouched.
    """
    owns_client = client is None
    if owns_client:
        client = GitHubClient(config)
    log.info("Fetching merged PRs for %s/%s...", config.owner, config.repo)

    collected = []
    page = 1
    try:
        while True:
            prs = client.list_closed_pulls(config.owner, config.repo, page, config.page_size)
            if not prs:
                break

            # closed is not merged: only PRs with a merge timestamp count
            for pr in (p for p in prs if p.get("merged_at")):
                log.info("Processing PR #%s...", pr.get("number"))
                collected.append(client.get_pull(config.owner, config.repo, pr["number"]))

            page += 1
            if len(collected) >= config.max_prs:
                break
    finally:
        if owns_client:
            client.close()

    log.debug("Collected %d merged PRs, stopped at page %d", len(collected), page)
    return collected
