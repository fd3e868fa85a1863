"""Tests for the scene description parser."""

import json
import math
from pathlib import Path

import pytest

from phongtrace.vec3 import Vec3, Point3, Color, Albedo
from phongtrace.shapes import Sphere, Cylinder
from phongtrace.materials import PALETTE
from phongtrace.shading import BACKGROUND_COLOR
from phongtrace.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene


DEMO_SCENE = Path(__file__).resolve().parent.parent / "scenes" / "demo.yaml"


class TestParseDict:
    """Parsing from dictionaries."""

    def test_empty_scene_defaults(self):
        scene, camera, settings = parse_scene({})
        assert len(scene) == 0
        assert scene.lights == []
        assert camera.position == Point3(0, 0, 0)
        assert abs(camera.fov - math.pi / 2) < 1e-12
        assert settings.width == 1024
        assert settings.height == 768
        assert settings.background_color == BACKGROUND_COLOR

    def test_sphere(self):
        scene, _, _ = parse_scene({
            'objects': [{'type': 'sphere', 'center': [1, 2, 3], 'radius': 0.5}]
        })
        sphere = scene.primitives[0]
        assert isinstance(sphere, Sphere)
        assert sphere.center == Point3(1, 2, 3)
        assert sphere.radius == 0.5

    def test_cylinder(self):
        scene, _, _ = parse_scene({
            'objects': [{'type': 'Cylinder', 'center': {'x': -6, 'y': -3, 'z': -20},
                         'radius': 2, 'height': 4}]
        })
        cyl = scene.primitives[0]
        assert isinstance(cyl, Cylinder)
        assert cyl.center == Point3(-6, -3, -20)
        assert cyl.height == 4.0

    def test_object_order_preserved(self):
        scene, _, _ = parse_scene({
            'objects': [
                {'type': 'cylinder', 'radius': 1, 'height': 1},
                {'type': 'sphere'},
            ]
        })
        assert isinstance(scene.primitives[0], Cylinder)
        assert isinstance(scene.primitives[1], Sphere)

    def test_named_material(self):
        scene, _, _ = parse_scene({
            'materials': {
                'shiny': {'albedo': [0.2, 0.8], 'diffuse_color': [1, 1, 0], 'specular_exponent': 100}
            },
            'objects': [{'type': 'sphere', 'material': 'shiny'}]
        })
        material = scene.primitives[0].material
        assert material.albedo == Albedo(0.2, 0.8)
        assert material.diffuse_color == Color(1, 1, 0)
        assert material.specular_exponent == 100

    def test_palette_materials_available(self):
        scene, _, _ = parse_scene({'objects': [{'type': 'sphere', 'material': 'red'}]})
        assert scene.primitives[0].material == PALETTE['red']

    def test_inline_material_with_hex_color(self):
        scene, _, _ = parse_scene({
            'objects': [{
                'type': 'sphere',
                'material': {'albedo': {'diffuse': 0.6, 'specular': 0.3},
                             'diffuse_color': '#ff0000', 'specular_exponent': 60}
            }]
        })
        material = scene.primitives[0].material
        assert material == PALETTE['red']

    def test_lights(self):
        scene, _, _ = parse_scene({
            'lights': [
                {'position': [-20, 20, 20], 'intensity': 1.5},
                {'type': 'point', 'position': [20, 30, 20], 'intensity': 1.8},
            ]
        })
        assert len(scene.lights) == 2
        assert scene.lights[0].position == Point3(-20, 20, 20)
        assert scene.lights[1].intensity == 1.8

    def test_camera_fov_in_degrees(self):
        _, camera, _ = parse_scene({'camera': {'position': [0, 1, 0], 'look_at': [0, 1, -5], 'fov': 60}})
        assert camera.position == Point3(0, 1, 0)
        assert abs(camera.fov - math.radians(60)) < 1e-12
        assert camera.direction(2, 2, 5, 5) == Vec3(0, 0, -1)

    def test_camera_look_from_alias(self):
        _, camera, _ = parse_scene({'camera': {'look_from': [1, 2, 3], 'look_at': [1, 2, 0]}})
        assert camera.position == Point3(1, 2, 3)

    def test_render_settings(self):
        _, _, settings = parse_scene({
            'render': {'width': 320, 'height': 200, 'background': [0, 0, 0]}
        })
        assert settings.width == 320
        assert settings.height == 200
        assert settings.background_color == Color(0, 0, 0)


class TestParseErrors:
    """Malformed scenes raise SceneParseError."""

    def test_unknown_object_type(self):
        with pytest.raises(SceneParseError, match="cuboid"):
            parse_scene({'objects': [{'type': 'cuboid'}]})

    def test_unknown_material(self):
        with pytest.raises(SceneParseError, match="Unknown material"):
            parse_scene({'objects': [{'type': 'sphere', 'material': 'chrome'}]})

    def test_unknown_material_type(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'glass': {'type': 'dielectric'}}})

    def test_unknown_light_type(self):
        with pytest.raises(SceneParseError):
            parse_scene({'lights': [{'type': 'area'}]})

    def test_bad_vector_arity(self):
        with pytest.raises(SceneParseError, match="3 components"):
            parse_scene({'objects': [{'type': 'sphere', 'center': [1, 2]}]})

    def test_bad_albedo_arity(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'m': {'albedo': [1, 0, 0]}}})

    def test_non_numeric_radius(self):
        with pytest.raises(SceneParseError):
            parse_scene({'objects': [{'type': 'sphere', 'radius': 'big'}]})

    @pytest.mark.parametrize("field", ['radius', 'height'])
    def test_non_positive_size(self, field):
        obj = {'type': 'cylinder', 'radius': 1, 'height': 1}
        obj[field] = 0
        with pytest.raises(SceneParseError, match="positive"):
            parse_scene({'objects': [obj]})

    def test_negative_specular_exponent(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'m': {'specular_exponent': -5}}})

    def test_bad_hex_color(self):
        with pytest.raises(SceneParseError):
            parse_scene({'materials': {'m': {'diffuse_color': '#zzzzzz'}}})

    def test_fov_too_wide(self):
        with pytest.raises(SceneParseError):
            parse_scene({'camera': {'fov': 180}})

    @pytest.mark.parametrize("data", [
        {'objects': [5]},
        {'objects': {'type': 'sphere'}},
        {'lights': ['x']},
        {'camera': 5},
        {'render': [1, 2]},
        {'materials': {'m': 3}},
        {'materials': ['red']},
    ])
    def test_wrong_section_shape(self, data):
        with pytest.raises(SceneParseError, match="must be"):
            parse_scene(data)

    def test_camera_looking_at_itself(self):
        with pytest.raises(SceneParseError, match="look_at"):
            parse_scene({'camera': {'position': [0, 0, 0], 'look_at': [0, 0, 0]}})

    def test_camera_up_parallel_to_view(self):
        with pytest.raises(SceneParseError, match="vup"):
            parse_scene({'camera': {'position': [0, 5, 0], 'look_at': [0, 0, 0]}})

    def test_camera_looking_down_with_other_up(self):
        _, camera, _ = parse_scene({
            'camera': {'position': [0, 5, 0], 'look_at': [0, 0, 0], 'vup': [0, 0, -1]}
        })
        assert abs(camera.direction(0, 0, 4, 4).length() - 1.0) < 1e-10
        assert camera.direction(0, 0, 4, 4) != camera.direction(3, 3, 4, 4)

    @pytest.mark.parametrize("size", [1.5, 0.5])
    def test_fractional_image_size(self, size):
        with pytest.raises(SceneParseError, match="whole number"):
            parse_scene({'render': {'width': size}})

    def test_whole_float_image_size(self):
        _, _, settings = parse_scene({'render': {'width': 64.0, 'height': 48}})
        assert (settings.width, settings.height) == (64, 48)
        assert isinstance(settings.width, int)


class TestEmptySections:
    """Keys present with no value, as written by `objects:` in YAML."""

    @pytest.mark.parametrize("section", ['objects', 'lights', 'materials'])
    def test_empty_collection(self, section):
        scene, _, _ = parse_scene({section: None})
        assert len(scene) == 0
        assert scene.lights == []

    def test_empty_camera_and_render(self):
        _, camera, settings = parse_scene({'camera': None, 'render': None})
        assert camera.position == Point3(0, 0, 0)
        assert settings.width == 1024

    def test_empty_yaml_keys(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("objects:\nlights:\n")
        scene, _, _ = load_scene(str(path))
        assert len(scene) == 0


class TestParseFile:
    """Loading YAML and JSON files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(str(tmp_path / "nope.yaml"))

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps({
            'objects': [{'type': 'sphere', 'center': [0, 0, -5], 'radius': 1}],
            'lights': [{'position': [0, 10, 0], 'intensity': 2}],
            'render': {'width': 16, 'height': 8}
        }))
        scene, camera, settings = load_scene(str(path))
        assert len(scene) == 1
        assert scene.lights[0].intensity == 2.0
        assert settings.width == 16

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("objects: [unclosed\n")
        with pytest.raises(SceneParseError):
            load_scene(str(path))

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(SceneParseError):
            load_scene(str(path))

    def test_demo_scene_file(self):
        scene, camera, settings = load_scene(str(DEMO_SCENE))
        assert len(scene) == 2
        assert isinstance(scene.primitives[0], Sphere)
        assert isinstance(scene.primitives[1], Cylinder)
        assert scene.primitives[0].material == PALETTE['blue']
        assert scene.primitives[1].material == PALETTE['green']
        assert [light.intensity for light in scene.lights] == [1.5, 1.8]
        assert (settings.width, settings.height) == (1024, 768)

    def test_parser_instance_accumulates_state(self):
        parser = SceneParser()
        parser.parse_dict({'materials': {'mine': {'albedo': [0.5, 0.5]}}})
        assert 'mine' in parser.materials
