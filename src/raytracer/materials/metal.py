# materials/metal.py
import numpy as np

from raytracer.core.ray import Ray
from raytracer.core.utils import reflect, random_in_unit_sphere
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import HitRecord
from raytracer.materials.material import Material, ScatterResult


class Metal(Material):
    """
    Metal material: mirror reflection perturbed by a fuzz (roughness) factor.
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(fuzz, 1)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> ScatterResult:
        if rng is None:
            rng = np.random.default_rng()
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_sphere(rng) * self.fuzz

        scattered = self._scattered(rec.p, reflected)
        if scattered is not None and scattered.direction.dot(rec.normal) > 0:
            return scattered, self.albedo

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
