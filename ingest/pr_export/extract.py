from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, Optional

PLACEHOLDER = "N/A"


class RecordError(ValueError):
    """A pull request record that cannot be turned into a row."""


FIELDS = [
    "PR Number",
    "Title",
    "Author Username",
    "Author Name",
    "Author Email",
    "Merger Username",
    "Merger Name",
    "Merger Email",
    "Additions",
    "Deletions",
    "Created At",
    "Merged At",
    "Time to Merge (hours)",
]


def resolve_display_name(person: Optional[Dict[str, Any]], default: str = PLACEHOLDER) -> str:
    """Display name of a GitHub user object, or `default` when it has none.

    The pulls endpoints embed a "simple user" which normally lacks `name`,
    so the default is what most rows end up with.
    """
    return (person or {}).get("name") or default


def parse_timestamp(value: str) -> datetime:
    # fromisoformat only learned to read a trailing "Z" in 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def format_timestamp(dt: datetime) -> str:
    out = dt.isoformat()
    if out.endswith("+00:00"):
        out = out[:-6] + "Z"
    return out


def hours_between(start: datetime, end: datetime) -> float:
    # half-hundredths round away from zero: 7m30s is 0.13, not 0.12
    hours = Decimal(str((end - start).total_seconds())) / 3600
    return float(hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def to_row(pr: Dict[str, Any]) -> Dict[str, Any]:
    try:
        created_at = parse_timestamp(pr["created_at"])
        merged_at = parse_timestamp(pr["merged_at"])
    except (KeyError, AttributeError, ValueError) as e:
        raise RecordError(f"PR #{pr.get('number')} has no usable created_at/merged_at: {e!r}") from e

    author = pr.get("user") or {}
    merger = pr.get("merged_by") or author  # merge actor can be missing

    return {
        "PR Number": pr.get("number"),
        "Title": pr.get("title"),
        "Author Username": author.get("login"),
        "Author Name": resolve_display_name(author),
        "Author Email": PLACEHOLDER,  # never exposed by the pulls API
        "Merger Username": merger.get("login"),
        "Merger Name": resolve_display_name(merger),
        "Merger Email": PLACEHOLDER,
        "Additions": pr.get("additions"),
        "Deletions": pr.get("deletions"),
        "Created At": format_timestamp(created_at),
        "Merged At": format_timestamp(merged_at),
        "Time to Merge (hours)": hours_between(created_at, merged_at),
    }
