"""
Periodic Voronoi tessellation of a rectangle.

The seeds are copied into the surrounding domains (8 neighbours, or 24 with
two rings), an ordinary Voronoi diagram is built for the extended set, and
every bounded region is clipped back to the rectangle. Pieces cut from a
replica's region are the parts of the seed's periodic cell that wrap around
the domain boundary.

The 8-neighbour scheme assumes no periodic cell reaches more than one domain
width/height away from its seed. Few or strongly clustered seeds can break
that; when the clipped cells leave part of the domain uncovered the run is
repeated once with two rings.

Algorithm: Fritzen & Böhlke, Comput. Mech. (2009),
https://link.springer.com/article/10.1007%2Fs00466-008-0339-2
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import structlog

from .clipping import Clipper, ShapelyClipper
from .config import TessellationSettings
from .datastructures import (
    ExtendedSeedSet,
    PeriodicCell,
    PeriodicTessellation,
    Rectangle,
)
from .errors import ClipFailure
from .replication import replicate
from .seeds import RngLike, provide_seeds
from .voronoi import ScipyVoronoiBackend, VoronoiBackend, filter_bounded

logger = structlog.get_logger()

# (original seed index, replica offset, clipped pieces)
ClippedRegion = Tuple[int, Tuple[float, float], List[np.ndarray]]


def clip_regions(
    bounded: List[Tuple[int, np.ndarray]],
    extended: ExtendedSeedSet,
    rectangle: Rectangle,
    clipper: Clipper,
    *,
    on_failure: str = "skip",
    max_workers: int = 1,
) -> List[ClippedRegion]:
    """
    Clip every bounded region against the rectangle.

    Output order follows `bounded` regardless of max_workers. A region the
    clipper rejects is either skipped (logged, treated as an empty clip) or
    re-raised as ClipFailure carrying the seed index and replica offset.
    """

    def _clip_one(item):
        ext_index, polygon = item
        seed_index = int(extended.source_index[ext_index])
        offset = extended.offset_of(ext_index)
        try:
            pieces = clipper.clip(polygon, rectangle)
        except ClipFailure as e:
            located = e.with_location(seed_index, offset)
            if on_failure == "raise":
                raise located from e
            logger.warning("Skipping region rejected by clipper",
                           seed_index=seed_index, offset=offset, reason=str(e))
            pieces = []
        return seed_index, offset, pieces

    if max_workers > 1 and len(bounded) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            # map() yields in submission order
            return list(pool.map(_clip_one, bounded))
    return [_clip_one(item) for item in bounded]


def assemble(
    clipped: List[ClippedRegion],
    seeds: np.ndarray,
    rectangle: Rectangle,
) -> PeriodicTessellation:
    """Drop empty clips, keep order, pair cells with a copy of the seeds."""
    cells: List[PeriodicCell] = []
    for seed_index, offset, pieces in clipped:
        for coords in pieces:
            if len(coords) < 3:
                continue
            cells.append(PeriodicCell(
                polygon=np.array(coords, dtype=np.float64),
                seed_index=int(seed_index),
                offset=(float(offset[0]), float(offset[1])),
            ))
    return PeriodicTessellation(
        rectangle=rectangle,
        seeds=np.array(seeds, dtype=np.float64),
        cells=cells,
    )


def periodic_voronoi(
    domain: Union[Rectangle, Sequence[float]],
    seeds=None,
    count: Optional[int] = None,
    *,
    rng: RngLike = None,
    settings: Optional[TessellationSettings] = None,
    backend: Optional[VoronoiBackend] = None,
    clipper: Optional[Clipper] = None,
) -> PeriodicTessellation:
    """
    Periodic Voronoi tessellation of a rectangular domain.

    domain:  Rectangle or [bottomleft_x, bottomleft_y, width, height]
    seeds:   (N,2) seed coordinates; when given, count is ignored
    count:   number of seeds to sample when seeds is None (default 10)
    rng:     numpy Generator or int seed used for sampling

    Returns the clipped cells and the seeds actually used.
    """
    settings = settings or TessellationSettings()
    rectangle = Rectangle.from_domain(domain)
    backend = backend or ScipyVoronoiBackend()
    clipper = clipper or ShapelyClipper(
        multipart=settings.multipart_policy,
        area_tolerance=settings.area_tolerance,
    )

    S = provide_seeds(rectangle, seeds, count, rng=rng, settings=settings)
    log = logger.bind(n_seeds=len(S), domain=rectangle.bounds)

    if len(np.unique(S, axis=0)) == 1:
        # every point of the plane is nearest to some copy of the lone seed position
        log.info("Single seed position owns the whole domain")
        return assemble([(0, (0.0, 0.0), [rectangle.vertices()])], S, rectangle)

    rings = settings.replication_rings
    result = _tessellate(S, rectangle, rings, backend, clipper, settings, log)
    deficit = rectangle.area - result.total_area()
    tol = settings.area_tolerance * rectangle.area

    if deficit > tol and rings < 2:
        # a replica nearest to part of the domain sat on the hull of the first ring
        log.warning("Uncovered area with one replication ring, retrying with two",
                    deficit=deficit, rings=rings)
        rings = 2
        result = _tessellate(S, rectangle, rings, backend, clipper, settings, log)
        deficit = rectangle.area - result.total_area()

    if deficit > tol:
        log.warning("Tessellation leaves part of the domain uncovered",
                    deficit=deficit, rings=rings)

    log.info("Periodic tessellation complete", n_cells=result.cell_count(), rings=rings)
    return result


def _tessellate(S, rectangle, rings, backend, clipper, settings, log) -> PeriodicTessellation:
    extended = replicate(S, rectangle, rings=rings)
    regions = backend.compute_regions(extended.points)
    bounded = filter_bounded(regions)
    log.debug("Bounded regions", n_extended=len(extended), n_bounded=len(bounded), rings=rings)

    clipped = clip_regions(
        bounded,
        extended,
        rectangle,
        clipper,
        on_failure=settings.on_clip_failure,
        max_workers=settings.max_workers,
    )
    return assemble(clipped, S, rectangle)
