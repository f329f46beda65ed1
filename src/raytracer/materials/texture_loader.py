# materials/texture_loader.py
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from raytracer.errors import ConfigError
from raytracer.materials.textures import ImageTexture


def load_image(image_path: str) -> np.ndarray:
    """
    Load an image file as an RGB uint8 array of shape (height, width, 3).

    Raises:
        ConfigError: If the file is missing or is not a readable image.
    """
    if not os.path.exists(image_path):
        raise ConfigError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            return np.array(img, dtype=np.uint8)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ConfigError(f"Error loading texture {image_path}: {e}") from e


def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture.
    """
    return ImageTexture(load_image(image_path))
