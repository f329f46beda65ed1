"""Pytest configuration for raytracer tests.

Provides shared fixtures: a seeded random generator, the path of the fixed
test scene, and small scene documents that render quickly.
"""

import copy
import json
from pathlib import Path

import numpy as np
import pytest

DATA_DIR = Path(__file__).parent / "data"


class FixedRandom:
    """Stand-in generator whose draws are all the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def uniform(self, low, high):
        return low + (high - low) * self.value


@pytest.fixture
def rng():
    """Seeded generator so material sampling is repeatable within a test."""
    return np.random.default_rng(42)


@pytest.fixture
def test_scene_path():
    return DATA_DIR / "test_scene.json"


@pytest.fixture
def test_scene_dict(test_scene_path):
    with open(test_scene_path) as f:
        return json.load(f)


@pytest.fixture
def small_scene_dict(test_scene_dict):
    """The fixed test scene shrunk to 80x60 with few samples and bounces."""
    data = copy.deepcopy(test_scene_dict)
    data["width"] = 80
    data["height"] = 60
    data["samples_per_pixel"] = 2
    data["max_depth"] = 4
    return data


@pytest.fixture
def fixed_random():
    """Factory for generators that always draw the given value."""
    return FixedRandom
