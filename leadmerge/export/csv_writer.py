"""Delimited-text serialization for export rows."""

import csv
import io
from typing import Any, Iterable


def to_csv(rows: Iterable[dict[str, Any]], delimiter: str = ",") -> str:
    """Serialize rows to delimited text.

    The header comes from the first row's keys. Fields containing the
    delimiter, a quote or a line break are quoted; None becomes "".
    """
    rows = list(rows)
    if not rows:
        return ""

    headers = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row.get(header) is None else row.get(header) for header in headers])

    return buffer.getvalue().rstrip("\n")
