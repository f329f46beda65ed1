# materials/diffuse_light.py
from raytracer.core.ray import Ray
from raytracer.core.vector import Vector3
from raytracer.geometry.hittable import HitRecord
from raytracer.materials.material import Material, ScatterResult


class DiffuseLight(Material):
    """
    Emissive material. It never scatters; the emitted colour is reported as
    the attenuation with no outgoing ray, which the tracer treats as radiance.
    """
    def __init__(self, emit: Vector3 = None):
        self.emit = emit if emit is not None else Vector3(1.0, 1.0, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=None) -> ScatterResult:
        return None, self.emit

    def __repr__(self) -> str:
        return f"DiffuseLight({self.emit!r})"
