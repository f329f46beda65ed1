# materials/textures.py
import numpy as np

from raytracer.core.uv import UV
from raytracer.core.vector import Vector3


class Texture:
    """Base class for all textures."""
    def sample(self, uv: UV) -> Vector3:
        """Sample the texture at given UV coordinates."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")


class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def sample(self, uv: UV) -> Vector3:
        return self.color

    def __repr__(self) -> str:
        return f"SolidTexture({self.color!r})"


class CheckerTexture(Texture):
    """A checker pattern texture."""
    def __init__(self, color1: Vector3, color2: Vector3, scale: float = 1.0):
        self.color1 = color1
        self.color2 = color2
        self.scale = scale

    def sample(self, uv: UV) -> Vector3:
        x = int(uv.u * self.scale)
        y = int(uv.v * self.scale)
        is_even = (x + y) % 2 == 0
        return self.color1 if is_even else self.color2


class ImageTexture(Texture):
    """A texture backed by an 8-bit RGB image array of shape (height, width, 3)."""
    def __init__(self, pixels: np.ndarray):
        # Normalize to [0,1] once so sampling is a lookup
        self.data = np.asarray(pixels, dtype=np.float64) / 255.0
        self.height, self.width = self.data.shape[:2]

    def sample(self, uv: UV) -> Vector3:
        # Handle texture wrapping
        u = uv.u % 1.0
        v = 1.0 - (uv.v % 1.0)  # Image rows run top to bottom

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))
