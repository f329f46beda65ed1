from .ray import Ray
from .uv import UV
from .vector import Color, Vector3

__all__ = ["Vector3", "Color", "Ray", "UV"]
