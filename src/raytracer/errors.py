"""Exceptions raised by the raytracer."""


class RaytracerError(Exception):
    """Base class for all raytracer errors."""


class ConfigError(RaytracerError, ValueError):
    """The scene description is unreadable, unparsable or malformed."""


class ImageWriteError(RaytracerError, OSError):
    """The rendered image could not be written to its destination."""
