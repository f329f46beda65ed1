from .dielectric import Dielectric
from .diffuse_light import DiffuseLight
from .lambertian import Lambertian
from .material import Material, ScatterResult
from .metal import Metal
from .textures import CheckerTexture, ImageTexture, SolidTexture, Texture

__all__ = [
    "Material",
    "ScatterResult",
    "Lambertian",
    "Metal",
    "Dielectric",
    "DiffuseLight",
    "Texture",
    "SolidTexture",
    "CheckerTexture",
    "ImageTexture",
]
