"""Seed provider: echo caller seeds or sample them uniformly in the domain."""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Optional, Union

import numpy as np
import structlog

from .config import TessellationSettings
from .datastructures import Rectangle
from .errors import InvalidInput
from .sampling import sample_points_in_polygon

logger = structlog.get_logger()

RngLike = Union[np.random.Generator, int, None]


def make_rng(rng: RngLike, settings: Optional[TessellationSettings] = None) -> np.random.Generator:
    """Generator from a Generator, an int seed, or settings.random_seed."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None and settings is not None:
        rng = settings.random_seed
    return np.random.default_rng(rng)


def validate_seeds(seeds) -> np.ndarray:
    try:
        S = np.asarray(seeds)
    except (TypeError, ValueError) as e:
        raise InvalidInput("Seeds must have numeric type.") from e
    if S.size == 0:
        raise InvalidInput("At least one seed is required.", {"n_seeds": 0})
    if S.dtype == bool or not np.issubdtype(S.dtype, np.number):
        raise InvalidInput("Seeds must have numeric type.")
    if S.ndim != 2 or S.shape[1] != 2:
        raise InvalidInput("Seeds must be an Nx2 matrix.", {"shape": S.shape})
    S = S.astype(np.float64)
    bad = ~np.all(np.isfinite(S), axis=1)
    if np.any(bad):
        raise InvalidInput(
            "Seed coordinates must be finite.",
            {"seed_indices": np.flatnonzero(bad).tolist()},
        )
    return S


def validate_count(count) -> int:
    """Finite positive integer. Integral floats (4.0) are accepted, bools are not."""
    if isinstance(count, bool):
        raise InvalidInput("Seed count must be an integer.", {"count": count})
    if isinstance(count, Integral):
        n = int(count)
    elif isinstance(count, Real):
        c = float(count)
        if not math.isfinite(c) or not c.is_integer():
            raise InvalidInput("Seed count must be a finite integer.", {"count": count})
        n = int(c)
    else:
        raise InvalidInput("Seed count must be an integer.", {"count": count})
    if n < 1:
        raise InvalidInput("Seed count must be >= 1.", {"count": count})
    return n


def provide_seeds(
    rectangle: Rectangle,
    seeds=None,
    count=None,
    *,
    rng: RngLike = None,
    settings: Optional[TessellationSettings] = None,
) -> np.ndarray:
    """
    Return the seed set for a run.

    Explicit seeds are validated and returned as an (N,2) float64 copy, in the
    given order; count is ignored. Otherwise `count` points (default
    settings.default_seed_count) are drawn uniformly inside the rectangle.
    """
    settings = settings or TessellationSettings()

    if seeds is not None:
        S = validate_seeds(seeds)
        logger.debug("Using supplied seeds", n_seeds=len(S))
        return S.copy()

    n = validate_count(settings.default_seed_count if count is None else count)
    generator = make_rng(rng, settings)
    S = sample_points_in_polygon(rectangle.vertices(), n_points=n, rng=generator)
    logger.debug("Sampled seeds", n_seeds=n, domain=rectangle.bounds)
    return S
