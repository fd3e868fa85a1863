"""
phongtrace - A minimal Python ray tracer

One ray per pixel against a flat list of primitives, shaded with:
- Lambertian diffuse and Blinn-Phong specular terms
- Point lights with hard shadows
- Spheres and open-ended Y-axis cylinders
- Binary PPM (P6) output
"""

__version__ = "0.1.0"
__author__ = "phongtrace Team"

from .vec3 import Vec3, Point3, Color, Albedo
from .ray import Ray
from .materials import Material, PALETTE
from .shapes import Primitive, Sphere, Cylinder, HitRecord
from .lights import Light
from .scene import Scene, scene_intersect, MAX_DISTANCE
from .shading import (
    cast_ray, shade, light_intensities, shadow_ray, BACKGROUND_COLOR, SHADOW_EPSILON
)
from .camera import Camera
from .renderer import Renderer, RenderSettings, Framebuffer, render
from .image_io import quantize, write_ppm, save_image
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
