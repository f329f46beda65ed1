# materials/dielectric.py
import math

import numpy as np

from raytracer.core.ray import Ray
from raytracer.core.utils import reflect, refract, schlick
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import HitRecord
from raytracer.materials.material import Material, ScatterResult


class Dielectric(Material):
    """
    Glass-like material choosing between reflection and refraction with
    Schlick's approximation of the Fresnel term.
    """
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> ScatterResult:
        if not (self.ref_idx > 0 and math.isfinite(self.ref_idx)):
            return None
        if rng is None:
            rng = np.random.default_rng()

        attenuation = Vector3(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        # Calculate cosine using the angle between incoming ray and normal
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ni_over_nt * sin_theta > 1.0
        if cannot_refract or rng.random() < schlick(cos_theta, ni_over_nt):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ni_over_nt)

        scattered = self._scattered(rec.p, direction)
        if scattered is None:
            return None
        return scattered, attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
