"""Decoding of delimited text frames such as ``T;T-001;25.6``."""

from __future__ import annotations

from dataclasses import dataclass

FIELD_LIMIT = 49
UNKNOWN_TAG = "X"


@dataclass(frozen=True, slots=True)
class Frame:
    """One decoded unit of input: kind tag, sensor id and raw value text."""

    kind_tag: str
    sensor_id: str
    value_text: str


def parse_frame(line: str, delimiter: str = ";") -> Frame:
    """Split ``line`` into a :class:`Frame`.

    Empty tokens are skipped, so ``"T;;id;1"`` decodes like ``"T;id;1"``.
    Missing trailing fields become empty strings and a line without any token
    carries the ``"X"`` tag, which no sensor kind accepts.
    """
    tokens = [token for token in line.strip("\r\n").split(delimiter) if token]
    if not tokens:
        return Frame(kind_tag=UNKNOWN_TAG, sensor_id="", value_text="")

    sensor_id = tokens[1][:FIELD_LIMIT] if len(tokens) > 1 else ""
    value_text = tokens[2][:FIELD_LIMIT] if len(tokens) > 2 else ""
    return Frame(kind_tag=tokens[0][0], sensor_id=sensor_id, value_text=value_text)
