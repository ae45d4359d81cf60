"""CSV parsing for downloaded training data.

The parser is a small character-level state machine so that quoting
rules behave the same regardless of the dialect sniffing done by other
CSV readers: quoted fields may contain commas and newlines, a doubled
quote inside a quoted field is a literal quote, and both ``\\n`` and
``\\r\\n`` line endings are accepted.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

#: Accepted header names for the article text column.
TEXT_COLUMNS: tuple[str, ...] = ("text", "article", "content", "body")

#: Accepted header names for the label column.
LABEL_COLUMNS: tuple[str, ...] = ("label", "bias", "leaning", "dimension")


def parse_csv(text: str) -> list[list[str]]:
    """Parse CSV *text* into a list of rows.

    A trailing row made of a single empty field (produced by a final
    newline) is dropped.

    Args:
        text: Raw CSV content.

    Returns:
        List of rows, each a list of field strings.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        if in_quotes:
            if c == '"':
                if i + 1 < n and text[i + 1] == '"':
                    field.append('"')
                    i += 2
                    continue
                in_quotes = False
            else:
                field.append(c)
            i += 1
            continue

        if c == '"':
            in_quotes = True
        elif c == ",":
            row.append("".join(field))
            field = []
        elif c == "\n":
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
        elif c != "\r":
            field.append(c)
        i += 1

    row.append("".join(field))
    rows.append(row)
    if rows and rows[-1] == [""]:
        rows.pop()
    return rows


def find_column(header: Iterable[str], accepted: Iterable[str]) -> Optional[int]:
    """Return the index of the first header cell matching an accepted name.

    Matching is case-insensitive and ignores surrounding whitespace.
    """
    wanted = {name.lower() for name in accepted}
    for idx, cell in enumerate(header):
        if cell.strip().lower() in wanted:
            return idx
    return None
