from .ellipsoid import Ellipsoid
from .hittable import HitRecord, Hittable
from .sphere import Sphere, sphere_uv
from .world import HittableList

__all__ = [
    "HitRecord",
    "Hittable",
    "Sphere",
    "Ellipsoid",
    "HittableList",
    "sphere_uv",
]
