"""
Camera module for generating primary rays.

A pinhole camera with a vertical field of view, positioned anywhere via
look-at. One ray is generated through the center of each pixel.
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with perspective projection."""

    def __init__(
        self,
        position: Point3 = Point3(0, 0, 0),
        look_at: Point3 = Point3(0, 0, -1),
        vup: Vec3 = Vec3(0, 1, 0),
        fov: float = math.pi / 2
    ):
        """Create a camera.

        Args:
            position: Camera position in world space
            look_at: Point the camera is looking at
            vup: World up vector (usually (0, 1, 0))
            fov: Vertical field of view in radians
        """
        self.position = position
        self.fov = fov
        self.tan_half_fov = math.tan(fov / 2)

        # Compute orthonormal camera basis
        self.w = (position - look_at).normalize()  # Points backward from camera
        self.u = vup.cross(self.w).normalize()      # Points right
        self.v = self.w.cross(self.u)               # Points up

    def direction(self, i: int, j: int, width: int, height: int) -> Vec3:
        """Unit direction through the center of pixel (i, j).

        Args:
            i: Column, 0 = left
            j: Row, 0 = top
            width: Image width in pixels
            height: Image height in pixels
        """
        x = (2 * (i + 0.5) / width - 1) * self.tan_half_fov * width / height
        y = -(2 * (j + 0.5) / height - 1) * self.tan_half_fov
        return (self.u * x + self.v * y - self.w).normalize()

    def get_ray(self, i: int, j: int, width: int, height: int) -> Ray:
        """Generate the primary ray for pixel (i, j)."""
        return Ray(self.position, self.direction(i, j, width, height))

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, forward={-self.w}, fov={self.fov:.4f})"
