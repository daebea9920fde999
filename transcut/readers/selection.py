"""Readers for the selector's output: an ordered list of segment ids."""

import json
from pathlib import Path


def _as_id(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Segment id must be an integer, got {value!r}")
    return value


def parse_selection(data) -> list[int]:
    """Accept the shapes a selector may return.

    Either a bare list (of ints or of {"id": ...} objects) or an object with a
    "selected_ids" or "selectedClips" list.
    """
    if isinstance(data, dict):
        for key in ("selected_ids", "selectedClips"):
            if key in data:
                return parse_selection(data[key])
        raise ValueError("Selection object must contain 'selected_ids' or 'selectedClips'")

    if not isinstance(data, list):
        raise ValueError("Selection must be a JSON list or object")

    ids: list[int] = []
    for item in data:
        if isinstance(item, dict):
            if "id" not in item:
                raise ValueError(f"Selection entry has no 'id': {item!r}")
            ids.append(_as_id(item["id"]))
        else:
            ids.append(_as_id(item))
    return ids


def load_selection(path: str | Path) -> list[int]:
    return parse_selection(json.loads(Path(path).read_text()))


def parse_id_list(text: str) -> list[int]:
    """Parse a CLI id list such as "1,3,7-9" (ranges are inclusive)."""
    ids: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        lo, sep, hi = part.partition("-")
        try:
            if sep:
                start, end = int(lo), int(hi)
                if end < start:
                    raise ValueError(f"Descending range: {part!r}")
                ids.extend(range(start, end + 1))
            else:
                ids.append(int(part))
        except ValueError as e:
            raise ValueError(f"Invalid segment id list {text!r}: {e}") from e
    return ids
