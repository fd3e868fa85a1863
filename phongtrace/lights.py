"""
Point light sources.

A point light emits equally in all directions from a single position and
produces hard shadows. There is no distance falloff.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Point3, Vec3


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Position of the light
        intensity: Brightness multiplier
    """
    position: Point3
    intensity: float = 1.0

    def direction_from(self, point: Point3) -> Vec3:
        """Unit direction from a point towards the light."""
        return (self.position - point).normalize()

    def distance_from(self, point: Point3) -> float:
        """Distance from a point to the light."""
        return (self.position - point).length()
