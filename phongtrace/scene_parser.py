"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres and cylinders with materials)
- Point lights

Example scene file:
```yaml
camera:
  position: [0, 0, 0]
  look_at: [0, 0, -1]
  fov: 90

render:
  width: 1024
  height: 768
  background: [0.7, 0.9, 0.7]

materials:
  blue:
    albedo: [0.9, 0.1]
    diffuse_color: [0, 0, 1]
    specular_exponent: 10

objects:
  - type: sphere
    center: [2, -1, -20]
    radius: 2
    material: blue

  - type: cylinder
    center: [-6, -3, -20]
    radius: 2
    height: 4
    material: {albedo: [0.6, 0.3], diffuse_color: "#008000", specular_exponent: 60}

lights:
  - position: [-20, 20, 20]
    intensity: 1.5
```
"""

from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
import yaml

from .vec3 import Vec3, Color, Albedo
from .camera import Camera
from .shapes import Sphere, Cylinder
from .materials import Material, PALETTE
from .lights import Light
from .scene import Scene
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = dict(PALETTE)
        self.scene: Scene = Scene()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.info("Loading scene from %s", filepath)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])

        if 'camera' in data:
            self._parse_camera(data['camera'])
        else:
            self.camera = Camera()

        if 'render' in data:
            self._parse_settings(data['render'])
        else:
            self.settings = RenderSettings()

        logger.debug(
            "Parsed %d primitives, %d lights",
            len(self.scene.primitives), len(self.scene.lights)
        )
        return self.scene, self.camera, self.settings

    def _parse_float(self, data: Dict[str, Any], key: str, default: float) -> float:
        """Read a numeric field, reporting bad values as parse errors."""
        value = data.get(key, default)
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"'{key}' must be a number, got {value!r}") from e

    def _parse_positive(self, data: Dict[str, Any], key: str, default: float) -> float:
        value = self._parse_float(data, key, default)
        if value <= 0:
            raise SceneParseError(f"'{key}' must be positive, got {value}")
        return value

    def _parse_size(self, data: Dict[str, Any], key: str, default: int) -> int:
        """Read a pixel count; fractional values are rejected, not truncated."""
        value = self._parse_positive(data, key, default)
        if not value.is_integer():
            raise SceneParseError(f"'{key}' must be a whole number of pixels, got {value}")
        return int(value)

    def _section_mapping(self, data: Any, section: str) -> Dict[str, Any]:
        """A mapping section; an empty key (None) reads as no entries."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SceneParseError(f"'{section}' must be a mapping, got {data!r}")
        return data

    def _section_list(self, data: Any, section: str) -> List[Dict[str, Any]]:
        """A list section whose entries are all mappings."""
        if data is None:
            return []
        if not isinstance(data, list):
            raise SceneParseError(f"'{section}' must be a list, got {data!r}")
        for entry in data:
            if not isinstance(entry, dict):
                raise SceneParseError(f"Each entry in '{section}' must be a mapping, got {entry!r}")
        return data

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Color must have 3 components, got {len(data)}")
                return Color(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Color(
                    float(data.get('r', 0)),
                    float(data.get('g', 0)),
                    float(data.get('b', 0))
                )
            elif isinstance(data, str):
                # Handle hex colors
                if data.startswith('#') and len(data) == 7:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                    return Color(r, g, b)
                raise SceneParseError(f"Cannot parse color from string: {data}")
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Color from: {data}") from e
        raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_albedo(self, data: Any) -> Albedo:
        if isinstance(data, dict):
            data = [data.get('diffuse', 1.0), data.get('specular', 0.0)]
        if not isinstance(data, (list, tuple)) or len(data) != 2:
            raise SceneParseError(f"Albedo must have 2 components, got: {data}")
        try:
            return Albedo(float(data[0]), float(data[1]))
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse albedo from: {data}") from e

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        mat_type = str(mat_data.get('type', 'phong')).lower()
        if mat_type != 'phong':
            raise SceneParseError(f"Unknown material type: {mat_type}")

        albedo = self._parse_albedo(mat_data.get('albedo', [1.0, 0.0]))
        diffuse_color = self._parse_color(mat_data.get('diffuse_color', [0, 0, 0]))
        exponent = self._parse_float(mat_data, 'specular_exponent', 1.0)
        try:
            return Material(albedo, diffuse_color, exponent)
        except ValueError as e:
            raise SceneParseError(str(e)) from e

    def _parse_materials(self, materials_data: Any) -> None:
        """Parse materials section."""
        for name, mat_data in self._section_mapping(materials_data, 'materials').items():
            if not isinstance(mat_data, dict):
                raise SceneParseError(f"Material '{name}' must be a mapping, got {mat_data!r}")
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        for obj_data in self._section_list(objects_data, 'objects'):
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._parse_positive(obj_data, 'radius', 1.0)
                self.scene.add(Sphere(center, radius, material))

            elif obj_type == 'cylinder':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._parse_positive(obj_data, 'radius', 1.0)
                height = self._parse_positive(obj_data, 'height', 1.0)
                self.scene.add(Cylinder(center, radius, height, material))

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_lights(self, lights_data: Any) -> None:
        """Parse lights section."""
        for light_data in self._section_list(lights_data, 'lights'):
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            position = self._parse_vec3(light_data.get('position', [0, 5, 0]))
            intensity = self._parse_float(light_data, 'intensity', 1.0)
            self.scene.add_light(Light(position, intensity))

    def _parse_camera(self, camera_data: Any) -> None:
        """Parse camera section. The field of view is given in degrees."""
        camera_data = self._section_mapping(camera_data, 'camera')
        position = self._parse_vec3(
            camera_data.get('position', camera_data.get('look_from', [0, 0, 0]))
        )
        look_at = self._parse_vec3(camera_data.get('look_at', [0, 0, -1]))
        vup = self._parse_vec3(camera_data.get('vup', [0, 1, 0]))
        fov = self._parse_positive(camera_data, 'fov', 90.0)
        if fov >= 180:
            raise SceneParseError(f"'fov' must be below 180 degrees, got {fov}")

        # Both checks keep every primary ray direction unit length
        forward = look_at - position
        if forward.length_squared() == 0:
            raise SceneParseError(f"Camera 'look_at' must differ from its position {position}")
        if vup.cross(forward).length_squared() == 0:
            raise SceneParseError(f"Camera 'vup' {vup} is parallel to the view direction {forward}")

        self.camera = Camera(
            position=position,
            look_at=look_at,
            vup=vup,
            fov=math.radians(fov)
        )

    def _parse_settings(self, settings_data: Any) -> None:
        """Parse render settings section."""
        settings_data = self._section_mapping(settings_data, 'render')
        width = self._parse_size(settings_data, 'width', 1024)
        height = self._parse_size(settings_data, 'height', 768)
        if 'background' in settings_data:
            self.settings = RenderSettings(
                width=width,
                height=height,
                background_color=self._parse_color(settings_data['background'])
            )
        else:
            self.settings = RenderSettings(width=width, height=height)


def load_scene(filepath: str) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, Camera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
