# geometry/hittable.py
from typing import Optional

from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "front_face", "material", "u", "v")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material=None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal at intersection, facing the ray
        self.t = t              # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the front side
        self.material = material
        self.u = u              # Texture coordinates in [0, 1]
        self.v = v

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    material = None

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")
