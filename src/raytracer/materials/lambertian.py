# materials/lambertian.py
from typing import Union

import numpy as np

from raytracer.core.ray import Ray
from raytracer.core.utils import random_unit_vector
from raytracer.core.uv import UV
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import HitRecord
from raytracer.materials.material import Material, ScatterResult
from raytracer.materials.textures import Texture, SolidTexture


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        # Store either a solid color or a texture.
        if isinstance(albedo, Vector3):
            self.texture = SolidTexture(albedo)
        else:
            self.texture = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> ScatterResult:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation).
        """
        if rng is None:
            rng = np.random.default_rng()
        # Normal plus a unit vector gives a cosine-weighted direction.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        scattered = self._scattered(rec.p, scatter_direction)
        if scattered is None:
            return None

        attenuation = self.texture.sample(UV(rec.u, rec.v))
        return scattered, attenuation

    def __repr__(self) -> str:
        return f"Lambertian({self.texture!r})"
