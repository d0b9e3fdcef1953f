import numpy as np

from .datastructures import ExtendedSeedSet, Rectangle
from .errors import InvalidInput


def _ring_offsets(k: int):
    """Unit offsets on the square ring at Chebyshev distance k, counter-clockwise from E.

    k=1 gives E, NE, N, NW, W, SW, S, SE.
    """
    out = []
    # start at (k, 0) and walk the ring counter-clockwise
    for j in range(0, k + 1):
        out.append((k, j))
    for i in range(k - 1, -k - 1, -1):
        out.append((i, k))
    for j in range(k - 1, -k - 1, -1):
        out.append((-k, j))
    for i in range(-k + 1, k + 1):
        out.append((i, -k))
    for j in range(-k + 1, 0):
        out.append((k, j))
    return out


def neighbor_offsets(rings: int = 1) -> np.ndarray:
    """
    (R,2) integer multiples of (width, height) for the replicated domains.
    rings=1 -> 8 neighbours, rings=2 -> 24 neighbours (first ring first).
    """
    rings = int(rings)
    if rings < 1:
        raise InvalidInput("rings must be >= 1", {"rings": rings})
    offs = []
    for k in range(1, rings + 1):
        offs.extend(_ring_offsets(k))
    return np.asarray(offs, dtype=np.float64)


def replicate(seeds: np.ndarray, rectangle: Rectangle, *, rings: int = 1) -> ExtendedSeedSet:
    """
    Translate the seed set into the surrounding copies of the domain.

    Points are stacked as originals, then one block of N per offset in
    neighbor_offsets(rings) order. For rings=1 the size is exactly 9N.
    """
    S = np.asarray(seeds, dtype=np.float64)
    n = len(S)
    units = neighbor_offsets(rings)
    shifts = units * np.array([rectangle.width, rectangle.height], dtype=np.float64)

    blocks = [S] + [S + d[None, :] for d in shifts]
    offsets = [np.zeros((n, 2), dtype=np.float64)] + [np.tile(d, (n, 1)) for d in shifts]

    return ExtendedSeedSet(
        points=np.vstack(blocks),
        source_index=np.tile(np.arange(n, dtype=np.int64), len(shifts) + 1),
        offsets=np.vstack(offsets),
        n_original=n,
    )
