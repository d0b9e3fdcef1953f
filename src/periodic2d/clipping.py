from abc import ABC, abstractmethod
from typing import List

import numpy as np
from shapely.errors import GEOSException
from shapely.geometry import Polygon

from .datastructures import Rectangle
from .errors import ClipFailure


class Clipper(ABC):
    """Intersects a simple polygon (no holes) with the domain rectangle."""

    @abstractmethod
    def clip(self, polygon: np.ndarray, rectangle: Rectangle) -> List[np.ndarray]:
        """
        Return the pieces of polygon inside rectangle as (K,2) arrays.
        An empty list means the polygon misses the rectangle.
        """
        ...


class ShapelyClipper(Clipper):
    """
    GEOS intersection. Line/point contacts are not cells and are dropped,
    as are slivers whose area is below area_tolerance * rectangle.area.

    multipart: "largest" keeps the biggest piece, "all" keeps every piece.
    """

    def __init__(self, multipart: str = "largest", area_tolerance: float = 1e-9):
        if multipart not in ("largest", "all"):
            raise ValueError("multipart must be 'largest' or 'all'")
        self.multipart = multipart
        self.area_tolerance = area_tolerance

    def clip(self, polygon: np.ndarray, rectangle: Rectangle) -> List[np.ndarray]:
        coords = np.asarray(polygon, dtype=np.float64)
        if coords.ndim != 2 or coords.shape[1] != 2 or len(coords) < 3:
            raise ClipFailure(f"polygon must be (K>=3,2), got shape {coords.shape}")

        poly_cell = Polygon(coords)
        if not poly_cell.is_valid:
            raise ClipFailure("polygon is not simple (self-intersecting or degenerate)")

        try:
            clipped = poly_cell.intersection(rectangle.to_shapely())
        except GEOSException as e:
            raise ClipFailure(f"intersection failed: {e}", original_exception=e) from e

        if clipped.is_empty:
            return []

        min_area = self.area_tolerance * rectangle.area
        parts = [g for g in getattr(clipped, "geoms", [clipped])
                 if g.geom_type == "Polygon" and g.area > min_area]
        if not parts:
            return []

        if self.multipart == "largest":
            parts = [max(parts, key=lambda g: g.area)]

        return [np.array(g.exterior.coords[:-1], dtype=np.float64) for g in parts]
