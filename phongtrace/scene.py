"""
Scene container and nearest-hit resolution.

The resolver is a brute-force linear scan over the primitive list; it is
used for primary rays and for every shadow ray.
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence

from .vec3 import Vec3, Point3
from .shapes import Primitive, HitRecord
from .lights import Light

# Hits at or beyond this distance count as background
MAX_DISTANCE = 1000.0


def scene_intersect(
    origin: Point3,
    direction: Vec3,
    primitives: Iterable[Primitive]
) -> Optional[HitRecord]:
    """Find the closest intersection among all primitives.

    Args:
        origin: Ray origin
        direction: Unit ray direction
        primitives: Primitives to test, in any order

    Returns:
        HitRecord for the nearest hit with 0 <= t < MAX_DISTANCE, or None
    """
    nearest_t = MAX_DISTANCE
    nearest: Optional[Primitive] = None

    for primitive in primitives:
        t = primitive.ray_intersect(origin, direction)
        if t is not None and 0 <= t < nearest_t:
            nearest_t = t
            nearest = primitive

    if nearest is None:
        return None

    point = origin + direction * nearest_t
    return HitRecord(
        point=point,
        normal=nearest.normal(point),
        material=nearest.material,
        t=nearest_t
    )


class Scene:
    """An ordered list of primitives and a list of point lights."""

    def __init__(
        self,
        primitives: Optional[Sequence[Primitive]] = None,
        lights: Optional[Sequence[Light]] = None
    ):
        self.primitives: list[Primitive] = list(primitives) if primitives is not None else []
        self.lights: list[Light] = list(lights) if lights is not None else []

    def add(self, primitive: Primitive) -> None:
        """Add a primitive to the scene."""
        self.primitives.append(primitive)

    def add_light(self, light: Light) -> None:
        """Add a light to the scene."""
        self.lights.append(light)

    def intersect(self, origin: Point3, direction: Vec3) -> Optional[HitRecord]:
        """Nearest hit of a ray against this scene's primitives."""
        return scene_intersect(origin, direction, self.primitives)

    def __len__(self) -> int:
        return len(self.primitives)

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self.primitives)}, lights={len(self.lights)})"
