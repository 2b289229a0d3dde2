"""Extract the numeric score from a statistic block.

Blocks look like ``"#work_done_score : 42"``: the score is the integer
after the first colon.  Anything unparsable, zero or negative counts as
0, so callers never have to guard.
"""

from __future__ import annotations

import re

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def parse_score(content: str) -> int:
    """``"#work_done_score : 42"`` → 42, ``"label : -5"`` → 0."""
    parts = str(content).split(":")
    if len(parts) < 2:
        return 0
    match = _LEADING_INT.match(parts[1].strip())
    if match is None:
        return 0
    score = int(match.group())
    return score if score > 0 else 0
