from __future__ import annotations

from typing import Sequence

import numpy as np


Rect = tuple[float, float, float, float]


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


def intersects(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap; rectangles that only share an edge do not intersect."""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def overlap_matrix(first: Sequence, second: Sequence) -> np.ndarray:
    """
    Boolean matrix M where M[i, j] is True when first[i] and second[j] overlap.
    Items only need a ``bounds()`` method returning (x, y, w, h).
    """
    if not first or not second:
        return np.zeros((len(first), len(second)), dtype=bool)

    a = np.asarray([item.bounds() for item in first], dtype=np.float64)
    b = np.asarray([item.bounds() for item in second], dtype=np.float64)

    ax, ay, aw, ah = (a[:, k : k + 1] for k in range(4))
    bx, by, bw, bh = (b[:, k] for k in range(4))

    return (ax < bx + bw) & (bx < ax + aw) & (ay < by + bh) & (by < ay + ah)
