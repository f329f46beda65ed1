# geometry/sphere.py
import math
from typing import Optional, Tuple

from raytracer.core.ray import Ray
from raytracer.core.utils import clamp
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import Hittable, HitRecord


def sphere_uv(n: Vector3) -> Tuple[float, float]:
    """
    Texture coordinates of a point on the unit sphere.

    u wraps around the y axis starting from +z, v runs from the bottom pole
    (0) to the top pole (1).
    """
    u = math.atan2(n.x, n.z) / (2 * math.pi) + 0.5
    v = n.y * 0.5 + 0.5
    return clamp(u), clamp(v)


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not (self.radius > 0 and math.isfinite(self.radius)):
            return None

        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if a == 0 or discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrt_disc) / a
            if root <= t_min or root >= t_max:
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        rec.u, rec.v = sphere_uv(outward_normal)
        return rec

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
