"""CSV record reader for the card list exports.

The exports contain quoted multi-line rules text. Quote characters toggle the
quoted state wherever they appear and a doubled quote inside a quoted field is
one literal quote, which the stdlib csv module does not reproduce for quotes in
the middle of an unquoted field. Records are therefore split by a small state
machine.
"""

from __future__ import annotations

from collections.abc import Iterator


def parse_csv_records(text: str) -> Iterator[list[str]]:
    """
    Yield each CSV record as a list of fields.

    Quoted fields may contain commas and newlines; a doubled quote inside a
    quoted field is a literal quote. Carriage returns outside quotes are
    dropped. Empty fields are preserved.
    """
    if not text:
        return

    fields: list[str] = []
    buffer: list[str] = []
    in_quotes = False
    index = 0
    length = len(text)

    while index < length:
        char = text[index]

        if char == '"':
            if in_quotes and index + 1 < length and text[index + 1] == '"':
                buffer.append('"')
                index += 2
                continue
            in_quotes = not in_quotes
            index += 1
            continue

        if not in_quotes:
            if char == ",":
                fields.append("".join(buffer))
                buffer.clear()
                index += 1
                continue
            if char == "\r":
                index += 1
                continue
            if char == "\n":
                fields.append("".join(buffer))
                buffer.clear()
                yield fields
                fields = []
                index += 1
                continue

        buffer.append(char)
        index += 1

    if buffer or fields:
        fields.append("".join(buffer))
        yield fields


def read_csv_text(path) -> str:
    """Read a CSV export as UTF-8, tolerating a byte order mark."""
    with open(path, encoding="utf-8-sig") as fh:
        return fh.read()


__all__ = ["parse_csv_records", "read_csv_text"]
