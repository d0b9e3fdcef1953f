from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Sequence, Tuple

import numpy as np
from shapely.geometry import Polygon

from .errors import InvalidInput


def empty_polygon() -> np.ndarray:
    return np.zeros((0, 2), dtype=np.float64)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned closed rectangle [origin_x, origin_x + width] x [origin_y, origin_y + height].
    """
    origin_x: float
    origin_y: float
    width: float
    height: float

    def __post_init__(self):
        values = (self.origin_x, self.origin_y, self.width, self.height)
        for v in values:
            if isinstance(v, bool) or not isinstance(v, Real):
                raise InvalidInput("Domain must have numeric type.", {"domain": values})
        if not all(math.isfinite(float(v)) for v in values):
            raise InvalidInput("Domain values must be finite.", {"domain": values})
        if self.width <= 0:
            raise InvalidInput("Domain width must be positive.", {"domain": values})
        if self.height <= 0:
            raise InvalidInput("Domain height must be positive.", {"domain": values})

    @classmethod
    def from_domain(cls, domain: Sequence[float]) -> "Rectangle":
        """
        Build from a length-4 vector [bottomleft_x, bottomleft_y, width, height].
        """
        if isinstance(domain, Rectangle):
            return domain
        try:
            arr = np.asarray(domain)
        except (TypeError, ValueError) as e:
            raise InvalidInput("Domain must have numeric type.", {"domain": domain}) from e
        if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
            raise InvalidInput("Domain must have numeric type.", {"domain": domain})
        if arr.ndim != 1 or arr.size != 4:
            raise InvalidInput("A vector of length 4 is required.", {"domain": domain})
        x, y, w, h = (float(v) for v in arr)
        return cls(x, y, w, h)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (
            float(self.origin_x),
            float(self.origin_y),
            float(self.origin_x + self.width),
            float(self.origin_y + self.height),
        )

    @property
    def area(self) -> float:
        return float(self.width * self.height)

    def vertices(self) -> np.ndarray:
        """(4,2) corners, counter-clockwise from the origin."""
        minx, miny, maxx, maxy = self.bounds
        return np.array([
            [minx, miny],
            [maxx, miny],
            [maxx, maxy],
            [minx, maxy],
        ], dtype=np.float64)

    def to_shapely(self) -> Polygon:
        return Polygon(self.vertices())

    def tolerance(self, rel: float = 1e-9) -> float:
        return rel * max(float(self.width), float(self.height))

    def contains(self, points: np.ndarray, tol: float = 0.0) -> np.ndarray:
        """
        points: (N,2) -> mask (N,), closed bounds widened by tol
        """
        P = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        minx, miny, maxx, maxy = self.bounds
        return (
            (P[:, 0] >= minx - tol) & (P[:, 0] <= maxx + tol)
            & (P[:, 1] >= miny - tol) & (P[:, 1] <= maxy + tol)
        )


@dataclass(frozen=True)
class ExtendedSeedSet:
    """
    Original seeds followed by their translated replicas.

    points:       (M,2) all seed positions, originals first
    source_index: (M,)  index of the original seed each point was copied from
    offsets:      (M,2) translation applied to the original ((0,0) for originals)
    """
    points: np.ndarray
    source_index: np.ndarray
    offsets: np.ndarray
    n_original: int

    def __len__(self) -> int:
        return len(self.points)

    def offset_of(self, i: int) -> Tuple[float, float]:
        o = self.offsets[int(i)]
        return float(o[0]), float(o[1])


@dataclass(frozen=True)
class VoronoiRegion:
    seed_index: int   # index into the extended seed set
    bounded: bool
    polygon: np.ndarray = field(default_factory=empty_polygon)  # (K,2), empty if unbounded


@dataclass(frozen=True)
class PeriodicCell:
    """
    One clipped cell. A seed near the boundary owns several cells: the piece
    around the seed itself (offset (0,0)) and wrapped pieces cut from its replicas.
    """
    polygon: np.ndarray  # (K,2)
    seed_index: int      # original seed
    offset: Tuple[float, float]

    @property
    def is_wrapped(self) -> bool:
        return self.offset != (0.0, 0.0)

    def area(self) -> float:
        return float(Polygon(self.polygon).area)

    def centroid(self) -> np.ndarray:
        c = Polygon(self.polygon).centroid
        return np.array([c.x, c.y], dtype=np.float64)


@dataclass
class PeriodicTessellation:
    rectangle: Rectangle
    seeds: np.ndarray  # (N,2)
    cells: List[PeriodicCell]

    @property
    def polygons(self) -> List[np.ndarray]:
        return [c.polygon for c in self.cells]

    def cell_count(self) -> int:
        return len(self.cells)

    def seed_count(self) -> int:
        return len(self.seeds)

    def total_area(self) -> float:
        return float(sum(c.area() for c in self.cells))

    def cells_for_seed(self, seed_index: int) -> List[PeriodicCell]:
        return [c for c in self.cells if c.seed_index == int(seed_index)]
