"""
Renderer module - drives one primary ray per pixel.

Implements:
- Row-major framebuffer with top row first
- Single-threaded, deterministic rendering
- Per-row progress reporting
"""

from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional
import numpy as np

from .vec3 import Color
from .camera import Camera
from .lights import Light
from .scene import Scene
from .shapes import Primitive
from .shading import BACKGROUND_COLOR, cast_ray

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 1024
    height: int = 768
    background_color: Color = field(default_factory=lambda: BACKGROUND_COLOR)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class Framebuffer:
    """Flat row-major buffer of colors, top row first."""

    def __init__(self, width: int, height: int, fill: Color = Color(0, 0, 0)):
        self.width = width
        self.height = height
        self.pixels: list[Color] = [fill] * (width * height)

    def index(self, i: int, j: int) -> int:
        """Flat index of column i, row j."""
        return i + j * self.width

    def pixel(self, i: int, j: int) -> Color:
        return self.pixels[self.index(i, j)]

    def set_pixel(self, i: int, j: int, color: Color) -> None:
        self.pixels[self.index(i, j)] = color

    def to_array(self) -> np.ndarray:
        """Return the colors as a float64 array of shape (height, width, 3)."""
        data = np.array([c.to_array() for c in self.pixels], dtype=np.float64)
        return data.reshape(self.height, self.width, 3)

    def __len__(self) -> int:
        return len(self.pixels)

    def __getitem__(self, index: int) -> Color:
        return self.pixels[index]

    def __iter__(self) -> Iterator[Color]:
        return iter(self.pixels)


class Renderer:
    """Direct-illumination ray tracer."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Optional[Camera] = None) -> Framebuffer:
        """Render the scene into a framebuffer.

        Args:
            scene: The scene to render
            camera: The camera to render from (default camera if None)

        Returns:
            Framebuffer of unclamped colors
        """
        camera = camera if camera is not None else Camera()
        width = self.settings.width
        height = self.settings.height
        background = self.settings.background_color

        logger.info(
            "Rendering %dx%d, %d primitives, %d lights",
            width, height, len(scene.primitives), len(scene.lights)
        )
        start = time.perf_counter()

        framebuffer = Framebuffer(width, height)
        for j in range(height):
            for i in range(width):
                ray = camera.get_ray(i, j, width, height)
                framebuffer.set_pixel(
                    i, j, cast_ray(*ray, scene, background)
                )

            if self._progress_callback:
                self._progress_callback((j + 1) / height)

        logger.debug("Render finished in %.3f s", time.perf_counter() - start)
        return framebuffer


def render(
    primitives: Iterable[Primitive],
    lights: Iterable[Light],
    width: int,
    height: int,
    fov: float = math.pi / 2
) -> Framebuffer:
    """Render primitives and lights from the default camera at the origin.

    Args:
        primitives: Scene primitives
        lights: Point lights
        width: Image width in pixels
        height: Image height in pixels
        fov: Vertical field of view in radians

    Returns:
        Framebuffer of width * height colors
    """
    scene = Scene(list(primitives), list(lights))
    renderer = Renderer(RenderSettings(width=width, height=height))
    return renderer.render(scene, Camera(fov=fov))
