# renderer/raytracer.py
import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, List, Optional, Tuple

import numpy as np
from PIL import Image

from raytracer.core.ray import Ray
from raytracer.core.utils import clamp
from raytracer.core.vector import Color, Vector3
from raytracer.errors import ImageWriteError
from raytracer.geometry.hittable import Hittable, HitRecord
from raytracer.geometry.world import HittableList
from raytracer.materials.dielectric import Dielectric
from raytracer.materials.diffuse_light import DiffuseLight
from raytracer.renderer.sky import Sky
from raytracer.renderer.tone_mapping import encode_row

logger = logging.getLogger(__name__)

# Closest-hit interval; T_MIN keeps bounced rays off their own surface.
T_MIN = 0.001
T_MAX = math.inf

# Chance per light of sampling it directly at a shallow bounce.
LIGHT_SAMPLE_PROB = 0.1
GLASS_LIGHT_SAMPLE_PROB = 0.05

# Light probes are traced as a single bounce.
LIGHT_PROBE_MAX_DEPTH = 2
LIGHT_PROBE_DEPTH = 1

BLACK = Vector3(0.0, 0.0, 0.0)


def hit_world(world, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
    if not isinstance(world, Hittable):
        world = HittableList(world)
    return world.hit(ray, t_min, t_max)


def find_lights(objects: Iterable[Hittable]) -> List[Hittable]:
    """Surfaces whose material is emissive."""
    return [obj for obj in objects if isinstance(obj.material, DiffuseLight)]


def ray_color(ray: Ray, world, lights: List[Hittable], max_depth: int,
              depth: int, sky: Optional[Sky] = None, rng=None) -> Color:
    """
    Radiance arriving along ray, traced recursively through the world.

    Paths stop contributing once depth reaches zero. At the first couple of
    bounces the hit point is sometimes also connected to the center of every
    light with a one-bounce probe; the probes are averaged over the lights
    without any distance or solid-angle weighting.
    """
    if depth <= 0:
        return BLACK
    if rng is None:
        rng = np.random.default_rng()

    rec = hit_world(world, ray, T_MIN, T_MAX)
    if rec is None:
        if sky is None:
            return BLACK
        return sky.color(ray.direction)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        # Absorbed rays are not bounced towards lights either; they would
        # be absorbed in that direction too.
        return BLACK
    scattered_ray, attenuation = scattered
    if scattered_ray is None:
        # Emission. Probing the lights from here would be thrown away.
        return attenuation

    # Light rays are traced at depth 1, which still passes the depth test,
    # so one landing on a non-emitter may sample the lights again. This ends
    # only when a draw fails; with len(lights) * prob >= 1 every draw passes
    # and an occluded light is sampled without bound.
    light = BLACK
    prob = GLASS_LIGHT_SAMPLE_PROB if isinstance(rec.material, Dielectric) else LIGHT_SAMPLE_PROB
    if (lights
            and rng.random() > 1.0 - len(lights) * prob
            and depth > max_depth - 2):
        for source in lights:
            light_ray = Ray(rec.p, source.center - rec.p)
            target = ray_color(light_ray, world, lights, LIGHT_PROBE_MAX_DEPTH,
                               LIGHT_PROBE_DEPTH, sky, rng)
            light = light + attenuation * target
        light = light / len(lights)

    target = ray_color(scattered_ray, world, lights, max_depth, depth - 1, sky, rng)
    color = light + attenuation * target
    return Vector3(clamp(color.x), clamp(color.y), clamp(color.z))


def render_line(scene, lights: List[Hittable], y: int, rng) -> np.ndarray:
    """
    Render image row y (0 is the top row) into width * 3 RGB bytes.
    """
    width, height = scene.width, scene.height
    world = scene.world
    # Image rows run top to bottom while the camera's v runs bottom to top.
    u_span = max(width - 1, 1)
    v_span = max(height - 1, 1)

    accumulated = np.zeros((width, 3), dtype=np.float64)
    for x in range(width):
        red = green = blue = 0.0
        for _ in range(scene.samples_per_pixel):
            u = (x + rng.random()) / u_span
            v = (height - (y + rng.random())) / v_span
            r = scene.camera.get_ray(u, v, rng)
            c = ray_color(r, world, lights, scene.max_depth, scene.max_depth, scene.sky, rng)
            red += c.x
            green += c.y
            blue += c.z
        accumulated[x] = (red, green, blue)
    return encode_row(accumulated, scene.samples_per_pixel)


# Per-process copies of the read-only scene, installed once by the pool
# initializer rather than shipped with every row.
_worker_scene = None
_worker_lights = None


def _init_worker(scene, lights):
    global _worker_scene, _worker_lights
    _worker_scene = scene
    _worker_lights = lights


def _render_row(task: Tuple[int, np.random.SeedSequence]) -> Tuple[int, np.ndarray]:
    y, seed = task
    rng = np.random.default_rng(seed)
    return y, render_line(_worker_scene, _worker_lights, y, rng)


def render_pixels(scene, workers: Optional[int] = None,
                  lights: Optional[List[Hittable]] = None) -> np.ndarray:
    """
    Render the scene into a flat uint8 RGB buffer, top row first.

    Every row is an independent task with its own random generator; rows are
    written to disjoint slices of the buffer. With workers=1 the rows are
    rendered in the calling process.
    """
    if lights is None:
        lights = find_lights(scene.world)

    pixels = np.zeros((scene.height, scene.width * 3), dtype=np.uint8)
    seeds = np.random.SeedSequence().spawn(scene.height)

    if workers == 1:
        for y, seed in enumerate(seeds):
            pixels[y] = render_line(scene, lights, y, np.random.default_rng(seed))
    else:
        with ProcessPoolExecutor(max_workers=workers,
                                 initializer=_init_worker,
                                 initargs=(scene, lights)) as executor:
            for y, row in executor.map(_render_row, enumerate(seeds)):
                pixels[y] = row

    return pixels.reshape(-1)


def write_image(filename, pixels: np.ndarray, bounds: Tuple[int, int]):
    """
    Encode a flat RGB buffer as PNG.

    Raises:
        ImageWriteError: If the file cannot be created or written.
    """
    width, height = bounds
    image = Image.frombytes("RGB", (width, height), np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())
    try:
        image.save(filename, format="PNG")
    except OSError as e:
        raise ImageWriteError(f"error writing image {filename}: {e}") from e


def render(filename, scene, workers: Optional[int] = None):
    """
    Render the scene and write it to filename as a PNG.

    Raises:
        ImageWriteError: If the output cannot be written.
    """
    lights = find_lights(scene.world)
    logger.debug("Rendering %dx%d, %d spp, depth %d, %d objects, %d lights",
                 scene.width, scene.height, scene.samples_per_pixel,
                 scene.max_depth, len(scene.world), len(lights))

    start = time.perf_counter()
    pixels = render_pixels(scene, workers=workers, lights=lights)
    logger.info("Frame time: %dms", (time.perf_counter() - start) * 1000)

    write_image(filename, pixels, (scene.width, scene.height))
