# camera/camera.py
import math

from raytracer.core.ray import Ray
from raytracer.core.utils import random_in_unit_disk
from raytracer.core.vector import Vector3


class Camera:
    """
    Pinhole/thin-lens camera mapping normalized image-plane coordinates to
    world-space rays. Immutable once constructed so it can be shared by every
    render task.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0):
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        self.w = (look_from - look_at).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (self.origin -
                                  self.horizontal / 2 -
                                  self.vertical / 2 -
                                  self.w * focus_dist)

    @classmethod
    def from_viewport(cls, origin: Vector3, viewport_height: float,
                      viewport_width: float, focal_length: float) -> "Camera":
        """
        Axis-aligned camera at origin looking down -z with an explicit viewport.
        """
        camera = cls.__new__(cls)
        camera.focus_dist = focal_length
        camera.lens_radius = 0.0
        camera.u = Vector3(1.0, 0.0, 0.0)
        camera.v = Vector3(0.0, 1.0, 0.0)
        camera.w = Vector3(0.0, 0.0, 1.0)
        camera.origin = origin
        camera.horizontal = Vector3(viewport_width, 0.0, 0.0)
        camera.vertical = Vector3(0.0, viewport_height, 0.0)
        camera.lower_left_corner = (origin -
                                    camera.horizontal / 2.0 -
                                    camera.vertical / 2.0 -
                                    Vector3(0.0, 0.0, focal_length))
        return camera

    def get_ray(self, u: float, v: float, rng=None) -> Ray:
        """
        Ray from the camera through image-plane point (u, v); u runs left to
        right and v bottom to top. With a lens, rng jitters the ray origin.
        """
        if self.lens_radius <= 0 or rng is None:
            direction = (self.lower_left_corner +
                         self.horizontal * u +
                         self.vertical * v -
                         self.origin)
            return Ray(self.origin, direction)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * u +
                         self.vertical * v -
                         ray_origin)
        return Ray(ray_origin, ray_direction)

    def __repr__(self) -> str:
        return (f"Camera(origin={self.origin!r}, "
                f"lower_left_corner={self.lower_left_corner!r})")
