"""Configuration dataclass for the plane access bridge."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

__all__ = ["BridgeConfig", "DEFAULT_CONFIG", "PLANE_COUNT_POLICIES"]

PLANE_COUNT_POLICIES = ("floor", "strict")


@dataclass(frozen=True)
class BridgeConfig:
    """Plane count and shape limits for plane access.

    Notes
    -----
    ``plane_count_policy="floor"`` keeps the legacy behaviour: when the total
    sample count is not a multiple of ``width * height`` the plane count is
    silently truncated. ``"strict"`` raises ``InvalidShapeError`` instead.
    """

    plane_count_policy: str = "floor"
    max_extra_axes: int = 3

    def __post_init__(self) -> None:
        if self.plane_count_policy not in PLANE_COUNT_POLICIES:
            raise ValueError(
                f"Invalid plane_count_policy: {self.plane_count_policy!r} "
                f"(expected one of {PLANE_COUNT_POLICIES})"
            )
        if self.max_extra_axes < 0:
            raise ValueError(f"max_extra_axes must be >= 0, got {self.max_extra_axes}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BridgeConfig":
        """Build a config from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


DEFAULT_CONFIG = BridgeConfig()
