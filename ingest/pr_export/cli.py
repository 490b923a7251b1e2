import argparse, logging, sys
import requests
from .config import ConfigError, DEFAULT_OUTPUT, DEFAULT_PAGE_SIZE, DEFAULT_MAX_PRS, build_config
from .extract import RecordError
from .github import RemoteApiError
from .service import collect
from .sinks import export

log = logging.getLogger(__name__)


def _positive_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {n}")
    return n


def _positive_float(value):
    try:
        n = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {n}")
    return n


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="pr-export", description="Export merged GitHub PRs to CSV")
    ap.add_argument("-o", "--owner", help="Repository owner (username or organization)")
    ap.add_argument("-r", "--repo", help="Repository name")
    ap.add_argument("-t", "--token", help="GitHub API token (defaults to $GITHUB_TOKEN)")
    ap.add_argument("-f", "--output", default=DEFAULT_OUTPUT, help=f"Output CSV file (default: {DEFAULT_OUTPUT})")
    ap.add_argument("-p", "--page-size", type=_positive_int, default=DEFAULT_PAGE_SIZE,
                    help=f"Number of PRs per page (default: {DEFAULT_PAGE_SIZE})")
    ap.add_argument("-m", "--max-prs", type=_positive_int, default=DEFAULT_MAX_PRS,
                    help=f"Maximum number of PRs to fetch (default: {DEFAULT_MAX_PRS})")
    ap.add_argument("--timeout", type=_positive_float, default=None,
                    help="Per-request timeout in seconds (defaults to $GITHUB_TIMEOUT or 30)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(
            owner=args.owner, repo=args.repo, token=args.token, output=args.output,
            page_size=args.page_size, max_prs=args.max_prs, timeout=args.timeout,
        )
    except ConfigError as e:
        log.error("Error: %s", e)
        return 1

    try:
        records = collect(config)
        count = export(records, config.output)
    except RemoteApiError as e:
        log.error("Error: %s - %s", e.status, e.body)
        return 1
    except requests.RequestException as e:
        log.error("Error: request to GitHub failed: %s", e)
        return 1
    except RecordError as e:
        log.error("Error: %s", e)
        return 1
    except OSError as e:
        log.error("Error: cannot write %s: %s", config.output, e)
        return 1

    log.info("Successfully exported %d PRs to %s", count, config.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
