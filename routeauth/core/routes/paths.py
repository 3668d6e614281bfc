"""Route path normalization.

Normalized paths have single "/" separators, keep their leading "/" and
carry no trailing "/" (except the root path itself). Blank input
normalizes to "", which no route table entry can match.
"""

import re
from typing import Any, List

ROOT_PATH = "/"

_SLASH_RUNS = re.compile(r"/{2,}")


def normalize_path(path: Any) -> str:
    """Normalize a requested route path.

    Args:
        path: Raw path from the navigator; non-strings normalize to ""

    Returns:
        Normalized path, or "" for empty/whitespace/non-string input
    """
    if not isinstance(path, str) or not path.strip():
        return ""

    collapsed = _SLASH_RUNS.sub("/", path)
    if collapsed != ROOT_PATH and collapsed.endswith("/"):
        collapsed = collapsed[:-1]
    return collapsed


def ancestor_paths(path: str) -> List[str]:
    """List the segment-aligned ancestors of a normalized path.

    Ancestors are ordered nearest first and never include the root path:
    "/payment/success/detail" -> ["/payment/success", "/payment"].
    """
    if not path or path == ROOT_PATH:
        return []

    leading = ROOT_PATH if path.startswith(ROOT_PATH) else ""
    segments = [s for s in path.split("/") if s]

    ancestors = []
    for i in range(len(segments) - 1, 0, -1):
        ancestors.append(leading + "/".join(segments[:i]))
    return ancestors
