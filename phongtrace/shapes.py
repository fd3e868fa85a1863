"""
Geometric primitives for the ray tracer.

Each primitive implements the Primitive interface:
- ray_intersect(origin, direction) returns the ray parameter t of the hit,
  or None when the ray misses
- normal(point) returns the surface normal at a point on the surface

Both intersection routines assume a unit-length direction; t is then the
distance from the origin to the hit point.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional
import math

from .vec3 import Vec3, Point3
from .materials import Material


@dataclass
class HitRecord:
    """Stores information about the nearest ray-object intersection.

    Attributes:
        point: The intersection point in world space
        normal: The surface normal reported by the primitive
        material: The material of the primitive that was hit
        t: The ray parameter at intersection
    """
    point: Point3
    normal: Vec3
    material: Material
    t: float


class Primitive(ABC):
    """Abstract base class for all shapes that can be hit by rays."""

    def __init__(self, material: Optional[Material] = None):
        # Each primitive keeps its own copy of the material
        self.material = replace(material) if material is not None else Material()

    @abstractmethod
    def ray_intersect(self, origin: Point3, direction: Vec3) -> Optional[float]:
        """Test if a ray intersects this primitive.

        Args:
            origin: Ray origin
            direction: Unit ray direction

        Returns:
            The ray parameter t of the intersection, None if there is none
        """
        pass

    @abstractmethod
    def normal(self, point: Point3) -> Vec3:
        """Return the surface normal at a point on the surface."""
        pass


class Sphere(Primitive):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Optional[Material] = None):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere
            material: Material for shading (copied)
        """
        super().__init__(material)
        self.center = center
        self.radius = radius

    def ray_intersect(self, origin: Point3, direction: Vec3) -> Optional[float]:
        """Test ray-sphere intersection by projecting the center onto the ray.

        A sphere whose center lies behind the origin is never hit, even when
        the origin is inside it.
        """
        v = self.center - origin
        projection = direction.dot(v)
        if projection < 0:
            return None

        # Closest approach of the ray to the center
        pc = origin + direction * projection
        dist_sq = (self.center - pc).length_squared()
        r_sq = self.radius * self.radius
        if dist_sq > r_sq:
            return None

        half_chord = math.sqrt(r_sq - dist_sq)
        if v.length_squared() > r_sq:
            # Origin outside: entry point
            return (pc - origin).length() - half_chord
        # Origin inside: exit point
        return (pc - origin).length() + half_chord

    def normal(self, point: Point3) -> Vec3:
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Cylinder(Primitive):
    """A cylinder aligned along the Y axis.

    Only the lateral surface is intersected; the end caps are open.
    """

    def __init__(
        self,
        center: Point3,
        radius: float,
        height: float,
        material: Optional[Material] = None
    ):
        """Create a cylinder.

        Args:
            center: Center of the cylinder base
            radius: Radius of the cylinder
            height: Height of the cylinder above the base
            material: Material for shading (copied)
        """
        super().__init__(material)
        self.center = center
        self.radius = radius
        self.height = height
        self.y_min = center.y
        self.y_max = center.y + height

    def ray_intersect(self, origin: Point3, direction: Vec3) -> Optional[float]:
        """Test ray-cylinder intersection against the clipped lateral surface.

        Solves the quadratic in the XZ plane and keeps the smaller root,
        which may be negative when the origin is inside the infinite tube.
        """
        if direction.dot(self.center - origin) < 0:
            return None

        # Ray-infinite cylinder intersection (ignoring Y)
        oc = origin - self.center
        a = direction.x ** 2 + direction.z ** 2
        b = 2 * (direction.x * oc.x + direction.z * oc.z)
        c = oc.x ** 2 + oc.z ** 2 - self.radius ** 2

        # Parallel to the axis: no lateral crossing
        if a == 0:
            return None

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2 * a)
        t2 = (-b + sqrt_d) / (2 * a)
        t = min(t1, t2)

        y = origin.y + t * direction.y
        if self.y_min <= y <= self.y_max:
            return t
        return None

    def normal(self, point: Point3) -> Vec3:
        """Radial normal projected onto the XZ plane (not re-normalized)."""
        return (point - self.center).normalize().with_y(0.0)

    def __repr__(self) -> str:
        return f"Cylinder(center={self.center}, radius={self.radius}, height={self.height})"
