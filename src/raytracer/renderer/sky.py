# renderer/sky.py
from typing import Optional

import numpy as np

from raytracer.core.utils import clamp
from raytracer.core.vector import Color, Vector3

# Gradient endpoints: horizon-ish white blending to zenith blue.
HORIZON_COLOR = Vector3(1.0, 1.0, 1.0)
ZENITH_COLOR = Vector3(0.5, 0.7, 1.0)

# Texture radiance is scaled down so the backdrop does not overpower lights.
TEXTURE_SCALE = 0.7


class Sky:
    """
    Background radiance for rays that hit nothing.

    Without a texture the sky is a vertical gradient. With a texture (an
    RGB uint8 array of shape (height, width, 3)) the ray direction is mapped
    to pixel coordinates: x follows the direction's x component and y the
    inverted y component.
    """
    def __init__(self, texture: Optional[np.ndarray] = None):
        self.texture = texture

    @classmethod
    def default(cls) -> "Sky":
        return cls()

    def color(self, direction: Vector3) -> Color:
        unit_direction = direction.normalize()
        t = clamp(0.5 * (unit_direction.y + 1.0))

        if self.texture is None:
            return HORIZON_COLOR * (1.0 - t) + ZENITH_COLOR * t

        # TODO: confirm the unflipped u against an equirectangular reference image
        u = clamp(0.5 * (unit_direction.x + 1.0))
        height, width = self.texture.shape[:2]
        x = int(u * (width - 1))
        y = int((1.0 - t) * (height - 1))
        red, green, blue = self.texture[y, x, :3]
        return Vector3(
            TEXTURE_SCALE * float(red) / 255.0,
            TEXTURE_SCALE * float(green) / 255.0,
            TEXTURE_SCALE * float(blue) / 255.0,
        )

    def __repr__(self) -> str:
        if self.texture is None:
            return "Sky(gradient)"
        return f"Sky(texture={self.texture.shape[1]}x{self.texture.shape[0]})"
