"""Error types raised by the periodic tessellation pipeline."""

from typing import Any, Dict, Optional, Tuple


class PeriodicVoronoiError(Exception):
    """Base error. `context` holds whatever is needed to reproduce the failure."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = dict(context or {})


class InvalidInput(PeriodicVoronoiError, ValueError):
    """Malformed domain, seed list or seed count."""


class TessellationUnavailable(PeriodicVoronoiError):
    """The Voronoi backend could not build a diagram for the extended seed set."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(message, context)
        self.original_exception = original_exception


class ClipFailure(PeriodicVoronoiError):
    """The clipping backend rejected a region polygon."""

    def __init__(self, message: str, seed_index: Optional[int] = None,
                 offset: Optional[Tuple[float, float]] = None,
                 original_exception: Optional[Exception] = None):
        context = {"seed_index": seed_index, "offset": offset}
        super().__init__(message, context)
        self.seed_index = seed_index
        self.offset = offset
        self.original_exception = original_exception

    def with_location(self, seed_index: int, offset: Tuple[float, float]) -> "ClipFailure":
        """Copy of this error tagged with the original seed index and replica offset."""
        return ClipFailure(
            f"{self.args[0]} (seed {seed_index}, offset {offset})",
            seed_index=seed_index,
            offset=offset,
            original_exception=self.original_exception,
        )
