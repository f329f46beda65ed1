"""Offline Monte-Carlo ray tracer.

Renders JSON scene descriptions (camera, spheres and ellipsoids with
diffuse, metal, glass and light materials, optional sky) to PNG images,
one independent render task per image row.

Subpackages:
    core: Vector, ray and sampling utilities
    camera: Camera model generating primary rays
    geometry: Surfaces, hit records and the world list
    materials: Scattering models and textures
    renderer: Light transport, sky, tone mapping and the render driver
"""

__version__ = "0.1.0"
