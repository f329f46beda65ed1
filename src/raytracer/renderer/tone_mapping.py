# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit


@njit
def encode_row(accumulated, samples_per_pixel):
    """
    Average accumulated linear radiance and gamma-encode it to 8-bit RGB.

    Args:
        accumulated: float64 array of shape (width, 3) holding per-pixel sums.
        samples_per_pixel: Number of samples each sum was built from.

    Returns:
        uint8 array of shape (width * 3,) in RGB order.
    """
    width = accumulated.shape[0]
    output = np.zeros(width * 3, dtype=np.uint8)
    scale = 1.0 / samples_per_pixel
    for x in range(width):
        for c in range(3):
            value = accumulated[x, c] * scale
            # Negative and NaN values both fail this test
            if not value > 0.0:
                value = 0.0
            # Gamma 2.0
            value = math.sqrt(value)
            if value > 1.0:
                value = 1.0
            output[x * 3 + c] = int(value * 255.0 + 0.5)
    return output
