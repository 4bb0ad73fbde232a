"""Resolver behavior configuration."""

from pydantic import BaseModel, Field


class ResolverConfig(BaseModel):
    """Failure modes and limits of the path resolver."""

    assertive: bool = Field(
        default=False,
        description="Raise instead of returning None when a path cannot be resolved",
    )
    strict_relative: bool = Field(
        default=False,
        description="Raise on a relative base that does not prefix the resolved path",
    )
    readable_keys: bool = Field(
        default=True,
        description="Keep cache keys verbatim when they satisfy the key grammar",
    )
    evict_missing: bool = Field(
        default=False,
        description="Delete cache entries of resolutions whose target does not exist",
    )
    max_substitution_depth: int = Field(
        default=8,
        gt=0,
        description="Maximum %placeholder% nesting depth",
    )
    max_path_length: int | None = Field(
        default=None,
        gt=2,
        description="Path-length limit override (default: host limit)",
    )
