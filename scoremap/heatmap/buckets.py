"""Score → colour bucket.

    score < 0       → 1000  (out of scale)
    0               → 0
    [1, 40)         → 1
    [40, 60)        → 2
    [60, 70)        → 3
    [70, 80)        → 4
    [80, 90)        → 5
    [90, 100]       → 6
    > 100           → 1000  (out of scale)

Bucket 1000 is rendered with the highlight colour rather than treated as
an error.
"""

from __future__ import annotations

OUT_OF_SCALE = 1000
BUCKETS = (0, 1, 2, 3, 4, 5, 6, OUT_OF_SCALE)

# Exclusive upper bounds for buckets 1-5; bucket 6 closes at 100.
_UPPER_BOUNDS: tuple[tuple[int, int], ...] = (
    (40, 1),
    (60, 2),
    (70, 3),
    (80, 4),
    (90, 5),
)


def classify(score: float) -> int:
    if score < 0:
        return OUT_OF_SCALE
    if score == 0:
        return 0
    for bound, bucket in _UPPER_BOUNDS:
        if score < bound:
            return bucket
    if score <= 100:
        return 6
    return OUT_OF_SCALE
