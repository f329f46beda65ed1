"""Scene description loading.

Scenes are JSON documents describing the image, the camera, an optional sky
and an ordered list of tagged surfaces, each carrying a tagged material::

    {
        "width": 80, "height": 60, "samples_per_pixel": 4, "max_depth": 8,
        "sky": {},
        "camera": {"look_from": [0, 0, -3], "look_at": [0, 0, 0],
                   "vup": [0, 1, 0], "vfov": 20.0, "aspect": 1.333},
        "objects": [
            {"type": "sphere", "center": [0, 0, -1], "radius": 0.5,
             "material": {"type": "lambertian", "albedo": [0.5, 0.5, 0.5]}}
        ]
    }

Example:
    >>> from raytracer.config import load_scene
    >>> scene = load_scene("tests/data/test_scene.json")
    >>> scene.width, scene.height
    (800, 600)
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from raytracer.camera.camera import Camera
from raytracer.core.vector import Vector3
from raytracer.errors import ConfigError
from raytracer.geometry.ellipsoid import Ellipsoid
from raytracer.geometry.hittable import Hittable
from raytracer.geometry.sphere import Sphere
from raytracer.geometry.world import HittableList
from raytracer.materials.dielectric import Dielectric
from raytracer.materials.diffuse_light import DiffuseLight
from raytracer.materials.lambertian import Lambertian
from raytracer.materials.material import Material
from raytracer.materials.metal import Metal
from raytracer.materials.texture_loader import load_image, load_texture
from raytracer.materials.textures import CheckerTexture, Texture
from raytracer.renderer.sky import Sky

logger = logging.getLogger(__name__)

# Each bounce costs a stack frame in ray_color, so depth stays well under
# the interpreter recursion limit.
MAX_DEPTH_LIMIT = 500


@dataclass
class Scene:
    """Everything needed to render one image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera rays averaged per pixel.
        max_depth: Maximum number of bounces per camera ray.
        camera: The camera generating primary rays.
        world: Ordered collection of surfaces.
        sky: Background for rays that escape, or None for black.
    """

    width: int
    height: int
    samples_per_pixel: int
    max_depth: int
    camera: Camera
    world: HittableList = field(default_factory=HittableList)
    sky: Optional[Sky] = None

    @property
    def objects(self) -> List[Hittable]:
        return self.world.objects


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise ConfigError(f"{where}: missing field '{key}'")
    return data[key]


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where}: expected a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigError(f"{where}: expected a finite number, got {value!r}")
    return value


def _positive_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{where}: expected a positive integer, got {value!r}")
    return value


def _max_depth(value: Any) -> int:
    depth = _positive_int(value, "scene.max_depth")
    if depth > MAX_DEPTH_LIMIT:
        raise ConfigError(f"scene.max_depth: at most {MAX_DEPTH_LIMIT} bounces are supported, got {depth}")
    return depth


def _vector(value: Any, where: str) -> Vector3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"{where}: expected a list of three numbers, got {value!r}")
    x, y, z = (_number(v, where) for v in value)
    return Vector3(x, y, z)


def _resolve(path: Any, base_dir: Optional[str], where: str) -> str:
    if not isinstance(path, str):
        raise ConfigError(f"{where}: expected a file path, got {path!r}")
    if base_dir is not None and not os.path.isabs(path):
        return os.path.join(base_dir, path)
    return path


def _texture(data: Dict[str, Any], base_dir: Optional[str], where: str) -> Texture:
    kind = _require(data, "type", where)
    if kind == "checker":
        return CheckerTexture(
            _vector(_require(data, "even", where), f"{where}.even"),
            _vector(_require(data, "odd", where), f"{where}.odd"),
            _number(data.get("scale", 1.0), f"{where}.scale"),
        )
    if kind == "image":
        return load_texture(_resolve(_require(data, "path", where), base_dir, f"{where}.path"))
    raise ConfigError(f"{where}: unknown texture type {kind!r}")


def _lambertian(data, base_dir, where) -> Material:
    if "texture" in data:
        return Lambertian(_texture(data["texture"], base_dir, f"{where}.texture"))
    return Lambertian(_vector(_require(data, "albedo", where), f"{where}.albedo"))


def _metal(data, base_dir, where) -> Material:
    return Metal(
        _vector(_require(data, "albedo", where), f"{where}.albedo"),
        _number(data.get("fuzz", 0.0), f"{where}.fuzz"),
    )


def _glass(data, base_dir, where) -> Material:
    return Dielectric(
        _number(_require(data, "index_of_refraction", where), f"{where}.index_of_refraction")
    )


def _light(data, base_dir, where) -> Material:
    if "color" in data:
        return DiffuseLight(_vector(data["color"], f"{where}.color"))
    return DiffuseLight()


MATERIALS: Dict[str, Callable[[Dict[str, Any], Optional[str], str], Material]] = {
    "lambertian": _lambertian,
    "metal": _metal,
    "glass": _glass,
    "light": _light,
}


def material_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None,
                       where: str = "material") -> Material:
    kind = _require(data, "type", where)
    try:
        build = MATERIALS[kind]
    except (KeyError, TypeError):
        raise ConfigError(f"{where}: unknown material type {kind!r}") from None
    return build(data, base_dir, where)


def _sphere(data, material, where) -> Hittable:
    return Sphere(
        _vector(_require(data, "center", where), f"{where}.center"),
        _number(_require(data, "radius", where), f"{where}.radius"),
        material,
    )


def _ellipsoid(data, material, where) -> Hittable:
    return Ellipsoid(
        _vector(_require(data, "center", where), f"{where}.center"),
        _vector(_require(data, "radii", where), f"{where}.radii"),
        material,
    )


SURFACES: Dict[str, Callable[[Dict[str, Any], Material, str], Hittable]] = {
    "sphere": _sphere,
    "ellipsoid": _ellipsoid,
}


def surface_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None,
                      where: str = "object") -> Hittable:
    kind = _require(data, "type", where)
    try:
        build = SURFACES[kind]
    except (KeyError, TypeError):
        raise ConfigError(f"{where}: unknown object type {kind!r}") from None
    material = material_from_dict(_require(data, "material", where), base_dir, f"{where}.material")
    return build(data, material, where)


def camera_from_dict(data: Dict[str, Any], where: str = "camera") -> Camera:
    return Camera(
        _vector(_require(data, "look_from", where), f"{where}.look_from"),
        _vector(_require(data, "look_at", where), f"{where}.look_at"),
        _vector(_require(data, "vup", where), f"{where}.vup"),
        _number(_require(data, "vfov", where), f"{where}.vfov"),
        _number(_require(data, "aspect", where), f"{where}.aspect"),
        aperture=_number(data.get("aperture", 0.0), f"{where}.aperture"),
        focus_dist=_number(data.get("focus_dist", 1.0), f"{where}.focus_dist"),
    )


def sky_from_dict(data: Optional[Dict[str, Any]], base_dir: Optional[str] = None,
                  where: str = "sky") -> Optional[Sky]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigError(f"{where}: expected an object, got {type(data).__name__}")
    texture = data.get("texture")
    if texture is None:
        return Sky.default()
    return Sky(load_image(_resolve(texture, base_dir, f"{where}.texture")))


def scene_from_dict(data: Dict[str, Any], base_dir: Optional[str] = None) -> Scene:
    """Build a Scene from a parsed JSON document.

    Args:
        data: The decoded scene document.
        base_dir: Directory that relative texture paths are resolved against.

    Returns:
        The scene, ready to render.

    Raises:
        ConfigError: If any field is missing, of the wrong type or not finite.
    """
    objects = _require(data, "objects", "scene")
    if not isinstance(objects, list):
        raise ConfigError("scene.objects: expected a list")

    scene = Scene(
        width=_positive_int(_require(data, "width", "scene"), "scene.width"),
        height=_positive_int(_require(data, "height", "scene"), "scene.height"),
        samples_per_pixel=_positive_int(
            _require(data, "samples_per_pixel", "scene"), "scene.samples_per_pixel"
        ),
        max_depth=_max_depth(_require(data, "max_depth", "scene")),
        camera=camera_from_dict(_require(data, "camera", "scene")),
        world=HittableList(
            surface_from_dict(obj, base_dir, f"objects[{i}]") for i, obj in enumerate(objects)
        ),
        sky=sky_from_dict(data.get("sky"), base_dir),
    )
    logger.debug("Loaded scene with %d objects", len(scene.world))
    return scene


def load_scene(path) -> Scene:
    """Read and parse a JSON scene file.

    Raises:
        ConfigError: If the file cannot be read or does not describe a scene.
    """
    try:
        with open(path, "rb") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Unable to parse config json {path}: {e}") from e

    return scene_from_dict(data, base_dir=os.path.dirname(os.path.abspath(path)))
