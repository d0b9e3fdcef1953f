from .config import TessellationSettings, get_settings
from .datastructures import (
    ExtendedSeedSet,
    PeriodicCell,
    PeriodicTessellation,
    Rectangle,
    VoronoiRegion,
)
from .errors import ClipFailure, InvalidInput, PeriodicVoronoiError, TessellationUnavailable
from .clipping import Clipper, ShapelyClipper
from .logging_setup import configure_logging
from .replication import neighbor_offsets, replicate
from .sampling import sample_points_in_polygon
from .seeds import provide_seeds
from .tessellation import assemble, clip_regions, periodic_voronoi
from .voronoi import ScipyVoronoiBackend, VoronoiBackend, filter_bounded

__all__ = [
    "TessellationSettings",
    "get_settings",
    "ExtendedSeedSet",
    "PeriodicCell",
    "PeriodicTessellation",
    "Rectangle",
    "VoronoiRegion",
    "ClipFailure",
    "InvalidInput",
    "PeriodicVoronoiError",
    "TessellationUnavailable",
    "Clipper",
    "ShapelyClipper",
    "configure_logging",
    "neighbor_offsets",
    "replicate",
    "sample_points_in_polygon",
    "provide_seeds",
    "assemble",
    "clip_regions",
    "periodic_voronoi",
    "ScipyVoronoiBackend",
    "VoronoiBackend",
    "filter_bounded",
]
