"""Settings for periodic tessellation runs.

Values can be overridden through environment variables prefixed with
``PERIODIC_VORONOI_`` (e.g. ``PERIODIC_VORONOI_REPLICATION_RINGS=2``).
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TessellationSettings(BaseSettings):
    """Tunables for seed generation, replication, clipping and logging."""

    model_config = SettingsConfigDict(env_prefix="PERIODIC_VORONOI_", frozen=True)

    # Seeds
    default_seed_count: int = Field(default=10, ge=1, description="Seeds sampled when none are given")
    random_seed: Optional[int] = Field(default=None, description="Seed for the default random generator")

    # Replication: 1 ring = 8 neighbours, 2 rings = 24 neighbours
    replication_rings: int = Field(default=1, ge=1, le=2, description="Rings of replicated domains")

    # Clipping
    multipart_policy: Literal["largest", "all"] = Field(
        default="largest", description="What to keep when a clip yields several pieces"
    )
    on_clip_failure: Literal["skip", "raise"] = Field(
        default="skip", description="Skip a region the clipper rejects, or abort the run"
    )
    area_tolerance: float = Field(
        default=1e-9, gt=0.0, description="Relative area below which a clipped piece is dropped"
    )
    max_workers: int = Field(default=1, ge=1, description="Threads used for per-region clipping")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")


def get_settings(**overrides) -> TessellationSettings:
    """Settings from the environment, with keyword overrides applied on top."""
    return TessellationSettings(**overrides)
