# Role: Safe accessor for loosely-typed JSON trees (the upstream response).
# dig() walks a path of dict keys / list indexes and returns MISSING on any bad step instead of raising.

from __future__ import annotations

from typing import Any, Union

PathStep = Union[str, int]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def dig(node: Any, *path: PathStep) -> Any:
    """
    Return the value at `path` inside `node`, or MISSING.

    str steps index into dicts, int steps index into lists/tuples. A missing key,
    an out-of-range index, a None along the way or a container of the wrong type
    all yield MISSING.
    """
    current = node
    for step in path:
        if current is None or current is MISSING:
            return MISSING
        if isinstance(step, int) and not isinstance(step, bool):
            if not isinstance(current, (list, tuple)) or not -len(current) <= step < len(current):
                return MISSING
            current = current[step]
        elif isinstance(step, str):
            if not isinstance(current, dict) or step not in current:
                return MISSING
            current = current[step]
        else:
            return MISSING
    return current


def dig_text(node: Any, *path: PathStep) -> Any:
    # Key line: only non-empty strings count as "populated".
    value = dig(node, *path)
    if isinstance(value, str) and value:
        return value
    return MISSING
