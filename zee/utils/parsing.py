from __future__ import annotations

import json
import re
from typing import Any, Iterator, List, Optional, Tuple

FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def _strip_leading_json_label(s: str) -> str:
    # "json\n[ ... ]" -> "[ ... ]"
    return re.sub(r"^\s*json\s*\r?\n\s*(?=[\[{])", "", s, count=1, flags=re.IGNORECASE)


def _balanced_slices(text: str, opener: str, closer: str) -> Iterator[Tuple[int, int]]:
    """Yield (start, end_inclusive) indices of balanced JSON-like blocks.

    Tracks strings and escapes so brackets inside strings are ignored.
    """
    n = len(text)
    i = 0
    while i < n:
        if text[i] != opener:
            i += 1
            continue
        depth = 0
        j = i
        in_str = False
        esc = False
        while j < n:
            ch = text[j]
            if in_str:
                if esc:
                    esc = False
                elif ch == "\\":
                    esc = True
                elif ch == '"':
                    in_str = False
            else:
                if ch == '"':
                    in_str = True
                elif ch == opener:
                    depth += 1
                elif ch == closer:
                    depth -= 1
                    if depth == 0:
                        yield (i, j)
                        break
            j += 1
        i = j + 1


def _loads_array(raw: str) -> Optional[List[Any]]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, list) else None


def extract_json_array(text: str) -> List[Any]:
    """Return the first JSON array found in ``text``.

    Accepts a bare array, an array inside a fenced ```json block, or an array
    surrounded by prose. Objects are skipped. Raises ``ValueError`` when no
    array parses.
    """
    found = _loads_array(text.strip())
    if found is not None:
        return found

    for m in FENCE_RE.finditer(text):
        found = _loads_array(_strip_leading_json_label(m.group(1)).strip())
        if found is not None:
            return found

    for a, b in _balanced_slices(text, "[", "]"):
        found = _loads_array(text[a : b + 1])
        if found is not None:
            return found
    raise ValueError("No valid JSON array found.")
