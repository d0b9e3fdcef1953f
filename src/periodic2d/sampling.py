import numpy as np
import shapely
from shapely.geometry import Polygon


def sample_points_in_polygon(
    polygon: np.ndarray,
    *,
    target_area: float | None = None,
    n_points: int | None = None,
    rng: np.random.Generator,
    max_tries: int = 1_000_000,
) -> np.ndarray:
    """
    Uniform rejection sampling inside a simple polygon, using its bbox as proposal.
    Deterministic given rng seed.
    """
    poly = Polygon(polygon)
    if poly.is_empty or not poly.is_valid or poly.area <= 0.0:
        raise ValueError("polygon must be a valid polygon with positive area")
    area = poly.area

    if n_points is None:
        if target_area is None:
            raise ValueError("Either target_area or n_points required")
        n_points = max(1, int(area / target_area))
    n_points = int(n_points)
    if n_points < 0:
        raise ValueError("n_points must be >= 0")

    minx, miny, maxx, maxy = poly.bounds
    lo = np.array([minx, miny], dtype=np.float64)
    span = np.array([maxx - minx, maxy - miny], dtype=np.float64)

    out = []
    count = 0
    tries = 0
    # acceptance rate is area / bbox area
    batch = max(64, int(np.ceil(n_points * span.prod() / area * 1.2)))

    while count < n_points and tries < max_tries:
        P = rng.random((batch, 2)) * span + lo
        accepted = P[shapely.contains_xy(poly, P[:, 0], P[:, 1])]
        out.append(accepted)
        count += len(accepted)
        tries += batch

    if count < n_points:
        raise RuntimeError(f"Sampling failed: needed {n_points} points, got {count} (tries={tries}).")

    if not out:
        return np.zeros((0, 2), dtype=np.float64)
    return np.vstack(out)[:n_points].astype(np.float64)