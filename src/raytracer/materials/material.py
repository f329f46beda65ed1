# materials/material.py
from typing import Optional, Tuple

from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import HitRecord

# (scattered ray or None for pure emission, attenuation); None means absorbed.
ScatterResult = Optional[Tuple[Optional[Ray], Vector3]]


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> ScatterResult:
        """
        Computes the scattered ray and attenuation.

        Returns a tuple (scattered_ray, attenuation), where scattered_ray is
        None for emissive materials, or None if the ray is absorbed.
        rng is a numpy Generator; a fresh one is drawn when it is omitted.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    @staticmethod
    def _scattered(origin: Vector3, direction: Vector3) -> Optional[Ray]:
        """
        Builds the outgoing ray, or None when the direction is degenerate.
        """
        if not direction.is_finite() or direction.near_zero():
            return None
        return Ray(origin, direction)
