"""
Local illumination: Lambert diffuse plus Blinn-Phong specular.

Every light is tested with a single shadow ray. Occluded lights contribute
nothing; there is no ambient term, no recursion and no clamping.
"""

from __future__ import annotations
from typing import Tuple

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .shapes import HitRecord
from .scene import Scene

BACKGROUND_COLOR = Color(0.7, 0.9, 0.7)

# Offset of shadow ray origins along the surface normal
SHADOW_EPSILON = 1e-3

WHITE = Color(1.0, 1.0, 1.0)


def shadow_origin(hit: HitRecord, light_dir: Vec3) -> Point3:
    """Offset the hit point towards the side of the surface facing the light."""
    if light_dir.dot(hit.normal) < 0:
        return hit.point - hit.normal * SHADOW_EPSILON
    return hit.point + hit.normal * SHADOW_EPSILON


def shadow_ray(hit: HitRecord, light_dir: Vec3) -> Ray:
    """Ray from just off the surface towards a light."""
    return Ray(shadow_origin(hit, light_dir), light_dir)


def is_occluded(scene: Scene, hit: HitRecord, light_dir: Vec3, light_dist: float) -> bool:
    """True if something lies between the hit point and the light."""
    ray = shadow_ray(hit, light_dir)
    blocker = scene.intersect(*ray)
    return blocker is not None and ray.distance_to(blocker.point) < light_dist


def light_intensities(origin: Point3, hit: HitRecord, scene: Scene) -> Tuple[float, float]:
    """Sum the diffuse and specular light intensities arriving at a hit.

    Args:
        origin: Origin of the ray that produced the hit (the eye)
        hit: The surface hit being shaded
        scene: Scene providing lights and occluders

    Returns:
        Tuple of (diffuse, specular) intensity sums
    """
    diffuse = 0.0
    specular = 0.0
    view_dir = (origin - hit.point).normalize()
    exponent = hit.material.specular_exponent

    for light in scene.lights:
        light_dir = light.direction_from(hit.point)
        light_dist = light.distance_from(hit.point)

        if is_occluded(scene, hit, light_dir, light_dist):
            continue

        diffuse += light.intensity * max(0.0, light_dir.dot(hit.normal))

        half_vec = (view_dir + light_dir).normalize()
        specular += light.intensity * max(0.0, half_vec.dot(hit.normal)) ** exponent

    return diffuse, specular


def cast_ray(
    origin: Point3,
    direction: Vec3,
    scene: Scene,
    background: Color = BACKGROUND_COLOR
) -> Color:
    """Compute the color seen along a ray.

    Args:
        origin: Ray origin
        direction: Unit ray direction
        scene: The scene to shade against
        background: Color returned when nothing is hit

    Returns:
        Unclamped color for this ray
    """
    hit = scene.intersect(origin, direction)
    if hit is None:
        return background

    diffuse, specular = light_intensities(origin, hit, scene)
    material = hit.material
    return (
        material.diffuse_color * material.albedo.diffuse * diffuse
        + WHITE * material.albedo.specular * specular
    )


shade = cast_ray
