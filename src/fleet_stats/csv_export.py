"""CSV export of the ranked breakdown rows."""

import csv
import re
from pathlib import Path
from typing import Any

BREAKDOWN_HEADERS = ["Section", "Location", "Submetric", "Count"]


def header_to_key(header: str) -> str:
    """Convert a display header to a snake_case dict key.

    >>> header_to_key("Section")
    'section'
    >>> header_to_key("Server  Count")
    'server_count'
    """
    return re.sub(r"\s+", "_", header.strip()).lower()


def _format_value(value: Any) -> str:
    text = str(value) if value is not None else ""
    return text.replace("\n", " ").replace("\r", "")


def export_csv(rows: list[dict[str, Any]], output_path: str | Path) -> Path:
    """Write breakdown *rows* to *output_path* as CSV, in the order given.

    Column keys are derived from :data:`BREAKDOWN_HEADERS` via :func:`header_to_key`.
    """
    headers = BREAKDOWN_HEADERS
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    keys = [header_to_key(h) for h in headers]

    with open(path, "w", newline="") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(headers)
        for row in rows:
            writer.writerow([_format_value(row.get(k, "")) for k in keys])
    return path
