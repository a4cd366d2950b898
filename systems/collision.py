from __future__ import annotations
from typing import Iterable, Optional, Tuple

# (x, y, w, h) in world units, y pointing up
Rect = Tuple[float, float, float, float]

def overlaps(a: Rect, b: Rect) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by

def first_overlap(rect: Rect, others: Iterable[Rect]) -> Optional[int]:
    """Index of the first rect in others that overlaps rect, in iteration order."""
    for idx, other in enumerate(others):
        if overlaps(rect, other):
            return idx
    return None
