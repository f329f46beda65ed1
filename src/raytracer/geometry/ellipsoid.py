# geometry/ellipsoid.py
import math
from typing import Optional

from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import Hittable, HitRecord
from raytracer.geometry.sphere import sphere_uv


class Ellipsoid(Hittable):
    """
    Axis-aligned ellipsoid with per-axis semi-axis lengths (radii).

    Intersection scales space by the radii so the ellipsoid becomes a unit
    sphere, then solves the usual quadratic. Radii of (1, 1, 1) therefore
    give exactly the hits of a unit sphere.
    """
    def __init__(self, center: Vector3, radii: Vector3, material):
        self.center = center
        self.radii = radii
        self.material = material

    def _valid(self) -> bool:
        return all(r > 0 and math.isfinite(r) for r in self.radii)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self._valid():
            return None

        oc = (ray.origin - self.center) / self.radii
        d = ray.direction / self.radii
        a = d.length_squared()
        half_b = oc.dot(d)
        c = oc.length_squared() - 1.0
        discriminant = half_b * half_b - a * c

        if a == 0 or discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        for root in ((-half_b - sqrt_disc) / a, (-half_b + sqrt_disc) / a):
            if t_min < root < t_max:
                p = ray.at(root)
                local = p - self.center
                # Gradient of the implicit surface, not simply p - center
                outward_normal = (local / (self.radii * self.radii)).normalize()

                rec = HitRecord(p=p, t=root, material=self.material)
                rec.set_face_normal(ray, outward_normal)
                rec.u, rec.v = sphere_uv(local / self.radii)
                return rec
        return None

    def __repr__(self) -> str:
        return f"Ellipsoid({self.center!r}, {self.radii!r}, {self.material!r})"
