import csv
import logging
from pathlib import Path
from typing import Iterable, Dict, Any
from .extract import FIELDS, to_row

log = logging.getLogger(__name__)


def export(records: Iterable[Dict[str, Any]], path: str) -> int:
    """Write one CSV row per merged PR record, in the order given.

    Returns the number of data rows written. Every record is mapped before
    the file is opened, so a RecordError leaves no output behind; OSError
    from opening or writing the file is left to the caller.
    """
    rows = [to_row(pr) for pr in records]
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        w.writerows(rows)  # csv writes None as an empty cell
    log.debug("Wrote %d rows to %s", len(rows), path)
    return len(rows)
