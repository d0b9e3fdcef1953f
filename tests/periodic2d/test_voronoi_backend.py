import numpy as np
import pytest
from shapely.geometry import Polygon

from periodic2d.datastructures import VoronoiRegion
from periodic2d.errors import TessellationUnavailable
from periodic2d.voronoi import ScipyVoronoiBackend, filter_bounded


def _grid_3x3():
    return np.array([[x, y] for x in range(3) for y in range(3)], dtype=np.float64)


def test_only_center_of_grid_is_bounded():
    regions = ScipyVoronoiBackend().compute_regions(_grid_3x3())

    assert [r.seed_index for r in regions] == list(range(9))
    assert [r.bounded for r in regions] == [False] * 4 + [True] + [False] * 4

    center = regions[4]
    poly = Polygon(center.polygon)
    assert abs(poly.area - 1.0) < 1e-9
    assert np.allclose(poly.bounds, (0.5, 0.5, 1.5, 1.5))


def test_unbounded_regions_have_empty_polygon():
    regions = ScipyVoronoiBackend().compute_regions(_grid_3x3())
    assert regions[0].polygon.shape == (0, 2)


def test_filter_bounded_keeps_order():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=np.float64)
    regions = [
        VoronoiRegion(seed_index=0, bounded=False),
        VoronoiRegion(seed_index=1, bounded=True, polygon=square),
        VoronoiRegion(seed_index=2, bounded=False),
        VoronoiRegion(seed_index=3, bounded=True, polygon=square + 1),
    ]
    kept = filter_bounded(regions)
    assert [i for i, _ in kept] == [1, 3]
    assert np.array_equal(kept[1][1], square + 1)


def test_filter_bounded_empty():
    assert filter_bounded([]) == []


def test_collinear_points_fail():
    pts = np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
    with pytest.raises(TessellationUnavailable) as exc:
        ScipyVoronoiBackend().compute_regions(pts)
    assert exc.value.context["n_points"] == 4


def test_single_distinct_point_fails():
    pts = np.array([[1.0, 1.0], [1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(TessellationUnavailable):
        ScipyVoronoiBackend().compute_regions(pts)
