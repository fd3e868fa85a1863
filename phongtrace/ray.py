"""
Rays traced through the scene.

Primary rays come from ``Camera.get_ray`` and shadow rays from
``shading.shadow_ray``. Both carry a unit direction, so the ``t`` returned
by ``Primitive.ray_intersect`` is a distance in world units.
"""

from __future__ import annotations
from .vec3 import Vec3, Point3


class Ray:
    """An origin and a unit direction."""

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point3, direction: Vec3):
        self.origin = origin
        self.direction = direction

    def at(self, t: float) -> Point3:
        """Point at distance t along the ray."""
        return self.origin + self.direction * t

    def distance_to(self, point: Point3) -> float:
        """Straight-line distance from the ray origin to a point."""
        return (point - self.origin).length()

    def __iter__(self):
        # Unpacks as (origin, direction) for the intersection routines
        yield self.origin
        yield self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
