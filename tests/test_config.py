"""Tests for scene loading.

Tests cover:
- Loading the fixed test scene
- Material, surface, camera and sky construction
- Errors for malformed documents and unreadable files
- Relative texture paths
"""

import json
import math

import numpy as np
import pytest
from PIL import Image

from raytracer.config import (
    MAX_DEPTH_LIMIT,
    Scene,
    camera_from_dict,
    load_scene,
    material_from_dict,
    scene_from_dict,
    sky_from_dict,
    surface_from_dict,
)
from raytracer.core.vector import Vector3
from raytracer.errors import ConfigError
from raytracer.geometry.ellipsoid import Ellipsoid
from raytracer.geometry.sphere import Sphere
from raytracer.materials.dielectric import Dielectric
from raytracer.materials.diffuse_light import DiffuseLight
from raytracer.materials.lambertian import Lambertian
from raytracer.materials.metal import Metal
from raytracer.materials.textures import CheckerTexture, ImageTexture
from raytracer.renderer.sky import Sky


def write_png(path, color=(10, 20, 30), size=(4, 2)):
    Image.new("RGB", size, color).save(path)
    return path


class TestLoadScene:
    """The fixed test scene file."""

    def test_header(self, test_scene_path):
        scene = load_scene(test_scene_path)
        assert isinstance(scene, Scene)
        assert (scene.width, scene.height) == (800, 600)
        assert scene.samples_per_pixel == 16
        assert scene.max_depth == 8

    def test_objects_in_order(self, test_scene_path):
        scene = load_scene(test_scene_path)
        assert len(scene.world) == 5
        kinds = [type(obj) for obj in scene.objects]
        assert kinds == [Sphere, Sphere, Sphere, Ellipsoid, Sphere]
        materials = [type(obj.material) for obj in scene.objects]
        assert materials == [Lambertian, Dielectric, Lambertian, Metal, DiffuseLight]

    def test_values(self, test_scene_path):
        scene = load_scene(test_scene_path)
        ground, glass, _, ellipsoid, light = scene.objects
        assert ground.radius == 1000.0
        assert isinstance(ground.material.texture, CheckerTexture)
        assert glass.material.ref_idx == 1.5
        assert ellipsoid.radii == Vector3(0.6, 0.8, 1.2)
        assert ellipsoid.material.fuzz == 0.05
        assert light.center == Vector3(0.0, 4.0, -1.0)

    def test_gradient_sky(self, test_scene_path):
        scene = load_scene(test_scene_path)
        assert isinstance(scene.sky, Sky)
        assert scene.sky.texture is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Unable to read"):
            load_scene(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{ not json")
        with pytest.raises(ConfigError, match="Unable to parse"):
            load_scene(path)

    def test_config_error_is_value_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            load_scene(path)

    def test_relative_sky_texture(self, tmp_path, test_scene_dict):
        write_png(tmp_path / "sky.png")
        test_scene_dict["sky"] = {"texture": "sky.png"}
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(test_scene_dict))

        scene = load_scene(path)
        assert scene.sky.texture.shape == (2, 4, 3)
        assert tuple(scene.sky.texture[0, 0]) == (10, 20, 30)


class TestSceneFromDict:
    """Validation of the top-level document."""

    @pytest.mark.parametrize("key", ["width", "height", "samples_per_pixel", "max_depth", "camera", "objects"])
    def test_missing_field(self, test_scene_dict, key):
        del test_scene_dict[key]
        with pytest.raises(ConfigError, match=key):
            scene_from_dict(test_scene_dict)

    @pytest.mark.parametrize("value", [0, -3, 2.5, True, "80"])
    def test_bad_dimensions(self, test_scene_dict, value):
        test_scene_dict["width"] = value
        with pytest.raises(ConfigError, match="width"):
            scene_from_dict(test_scene_dict)

    def test_max_depth_limit(self, test_scene_dict):
        test_scene_dict["max_depth"] = MAX_DEPTH_LIMIT
        assert scene_from_dict(test_scene_dict).max_depth == MAX_DEPTH_LIMIT

        test_scene_dict["max_depth"] = MAX_DEPTH_LIMIT + 1
        with pytest.raises(ConfigError, match="max_depth"):
            scene_from_dict(test_scene_dict)

    def test_no_sky_is_black(self, test_scene_dict):
        del test_scene_dict["sky"]
        assert scene_from_dict(test_scene_dict).sky is None

    def test_objects_must_be_list(self, test_scene_dict):
        test_scene_dict["objects"] = {"type": "sphere"}
        with pytest.raises(ConfigError, match="objects"):
            scene_from_dict(test_scene_dict)

    def test_error_names_object_index(self, test_scene_dict):
        del test_scene_dict["objects"][2]["radius"]
        with pytest.raises(ConfigError, match=r"objects\[2\]"):
            scene_from_dict(test_scene_dict)

    def test_empty_world(self, test_scene_dict):
        test_scene_dict["objects"] = []
        assert len(scene_from_dict(test_scene_dict).world) == 0


class TestMaterials:
    """Tagged material records."""

    def test_lambertian_albedo(self):
        material = material_from_dict({"type": "lambertian", "albedo": [0.1, 0.2, 0.3]})
        assert isinstance(material, Lambertian)

    def test_lambertian_image_texture(self, tmp_path):
        write_png(tmp_path / "tex.png")
        material = material_from_dict(
            {"type": "lambertian", "texture": {"type": "image", "path": "tex.png"}},
            base_dir=str(tmp_path),
        )
        assert isinstance(material.texture, ImageTexture)

    def test_missing_texture_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            material_from_dict(
                {"type": "lambertian", "texture": {"type": "image", "path": "gone.png"}},
                base_dir=str(tmp_path),
            )

    def test_unknown_texture(self):
        with pytest.raises(ConfigError, match="texture type"):
            material_from_dict({"type": "lambertian", "texture": {"type": "noise"}})

    def test_metal_fuzz_default(self):
        material = material_from_dict({"type": "metal", "albedo": [0.8, 0.8, 0.8]})
        assert isinstance(material, Metal)
        assert material.fuzz == 0.0

    def test_glass(self):
        material = material_from_dict({"type": "glass", "index_of_refraction": 1.3})
        assert isinstance(material, Dielectric)

    def test_light_default_is_white(self):
        material = material_from_dict({"type": "light"})
        assert material.emit == Vector3(1.0, 1.0, 1.0)

    def test_light_color(self):
        material = material_from_dict({"type": "light", "color": [4.0, 2.0, 1.0]})
        assert material.emit == Vector3(4.0, 2.0, 1.0)

    def test_unknown_material(self):
        with pytest.raises(ConfigError, match="unknown material type 'plastic'"):
            material_from_dict({"type": "plastic"})

    @pytest.mark.parametrize("albedo", [[0.1, 0.2], "red", [0.1, None, 0.3], [math.nan, 0, 0], [True, 0, 0]])
    def test_bad_albedo(self, albedo):
        with pytest.raises(ConfigError, match="albedo"):
            material_from_dict({"type": "lambertian", "albedo": albedo})

    def test_not_an_object(self):
        with pytest.raises(ConfigError, match="expected an object"):
            material_from_dict(["lambertian"])


class TestSurfaces:
    """Tagged surface records."""

    def test_sphere(self):
        sphere = surface_from_dict({
            "type": "sphere", "center": [1, 2, 3], "radius": 2,
            "material": {"type": "light"},
        })
        assert isinstance(sphere, Sphere)
        assert sphere.center == Vector3(1.0, 2.0, 3.0)
        assert sphere.radius == 2.0

    def test_ellipsoid(self):
        ellipsoid = surface_from_dict({
            "type": "ellipsoid", "center": [0, 0, 0], "radii": [1, 2, 3],
            "material": {"type": "glass", "index_of_refraction": 1.5},
        })
        assert isinstance(ellipsoid, Ellipsoid)

    def test_non_positive_radius_is_accepted(self):
        sphere = surface_from_dict({
            "type": "sphere", "center": [0, 0, 0], "radius": -1,
            "material": {"type": "light"},
        })
        assert sphere.radius == -1.0

    def test_unknown_surface(self):
        with pytest.raises(ConfigError, match="unknown object type 'cube'"):
            surface_from_dict({"type": "cube", "material": {"type": "light"}})

    def test_missing_material(self):
        with pytest.raises(ConfigError, match="material"):
            surface_from_dict({"type": "sphere", "center": [0, 0, 0], "radius": 1})


class TestCameraAndSky:
    """Camera and background records."""

    def test_camera_defaults(self):
        camera = camera_from_dict({
            "look_from": [0, 0, 0], "look_at": [0, 0, -1], "vup": [0, 1, 0],
            "vfov": 90, "aspect": 2.0,
        })
        assert camera.lens_radius == 0.0
        assert camera.origin == Vector3(0.0, 0.0, 0.0)

    def test_camera_missing_vfov(self):
        with pytest.raises(ConfigError, match="vfov"):
            camera_from_dict({"look_from": [0, 0, 0], "look_at": [0, 0, -1], "vup": [0, 1, 0], "aspect": 2.0})

    def test_empty_sky_is_gradient(self):
        assert sky_from_dict({}).texture is None

    def test_absent_sky(self):
        assert sky_from_dict(None) is None

    def test_sky_texture(self, tmp_path):
        path = write_png(tmp_path / "sky.png", color=(255, 0, 128))
        sky = sky_from_dict({"texture": str(path)})
        assert sky.texture.dtype == np.uint8
        assert tuple(sky.texture[1, 3]) == (255, 0, 128)

    def test_unreadable_sky_texture(self, tmp_path):
        path = tmp_path / "sky.png"
        path.write_bytes(b"not a png")
        with pytest.raises(ConfigError, match="Error loading texture"):
            sky_from_dict({"texture": str(path)})

    def test_oversized_sky_texture(self, tmp_path, monkeypatch):
        path = write_png(tmp_path / "sky.png", size=(8, 8))
        # 64 pixels is more than twice the allowed size, which Pillow refuses
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 16)
        with pytest.raises(ConfigError, match="Error loading texture"):
            sky_from_dict({"texture": str(path)})

    def test_sky_must_be_object(self):
        with pytest.raises(ConfigError, match="sky"):
            sky_from_dict("blue")
