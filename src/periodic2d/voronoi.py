from abc import ABC, abstractmethod
from typing import List, Tuple

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi

from .datastructures import VoronoiRegion
from .errors import TessellationUnavailable

logger = structlog.get_logger()


class VoronoiBackend(ABC):
    """
    Computes one region per input point, in input order.
    Unbounded regions come back with bounded=False and an empty polygon.
    """

    @abstractmethod
    def compute_regions(self, points: np.ndarray) -> List[VoronoiRegion]:
        ...


def _drop_repeated_vertices(coords: np.ndarray, eps: float) -> np.ndarray:
    """Remove consecutive (cyclic) duplicates; Qhull repeats vertices at cocircular seeds."""
    if len(coords) == 0:
        return coords
    nxt = np.roll(coords, -1, axis=0)
    keep = np.any(np.abs(coords - nxt) > eps, axis=1)
    if not np.any(keep):
        return coords[:1]
    return coords[keep]


class ScipyVoronoiBackend(VoronoiBackend):
    """
    scipy.spatial.Voronoi (Qhull). Regions containing the vertex at infinity
    (index -1) are unbounded.
    """

    def __init__(self, qhull_options: str | None = None, dedup_eps: float = 1e-12):
        self.qhull_options = qhull_options
        self.dedup_eps = dedup_eps

    def compute_regions(self, points: np.ndarray) -> List[VoronoiRegion]:
        P = np.asarray(points, dtype=np.float64)
        if P.ndim != 2 or P.shape[1] != 2:
            raise TessellationUnavailable("points must be (M,2)", {"shape": P.shape})

        n_distinct = len(np.unique(P, axis=0))
        if n_distinct < 2:
            raise TessellationUnavailable(
                "Voronoi diagram needs at least 2 distinct points",
                {"n_points": len(P), "n_distinct": n_distinct},
            )
        if n_distinct < len(P):
            logger.warning("Duplicate seed positions", n_points=len(P), n_distinct=n_distinct)

        try:
            vor = Voronoi(P, qhull_options=self.qhull_options)
        except (QhullError, ValueError) as e:
            raise TessellationUnavailable(
                f"Voronoi construction failed: {e}",
                {"n_points": len(P)},
                original_exception=e,
            ) from e

        scale = float(np.max(np.abs(P))) if len(P) else 1.0
        eps = self.dedup_eps * max(scale, 1.0)

        regions: List[VoronoiRegion] = []
        for i in range(len(P)):
            region_idx = int(vor.point_region[i])
            region = vor.regions[region_idx] if region_idx >= 0 else []

            if len(region) < 3 or -1 in region:
                regions.append(VoronoiRegion(seed_index=i, bounded=False))
                continue

            coords = _drop_repeated_vertices(np.asarray(vor.vertices[region], dtype=np.float64), eps)
            if len(coords) < 3 or not np.all(np.isfinite(coords)):
                regions.append(VoronoiRegion(seed_index=i, bounded=False))
                continue

            regions.append(VoronoiRegion(seed_index=i, bounded=True, polygon=coords))

        logger.debug(
            "Voronoi regions computed",
            n_points=len(P),
            n_bounded=sum(r.bounded for r in regions),
        )
        return regions


def filter_bounded(regions: List[VoronoiRegion]) -> List[Tuple[int, np.ndarray]]:
    """(seed_index, polygon) for every bounded region, in input order."""
    return [(r.seed_index, r.polygon) for r in regions if r.bounded]