from .raytracer import find_lights, ray_color, render, render_line, render_pixels, write_image
from .sky import Sky

__all__ = [
    "Sky",
    "find_lights",
    "ray_color",
    "render",
    "render_line",
    "render_pixels",
    "write_image",
]
