# materials/material.py
import random
from typing import NamedTuple, Optional
from weekend.core.ray import Ray
from weekend.core.vector import Colour
from weekend.geometry.hittable import HitRecord

class Scattered(NamedTuple):
    """
    A ray leaving a surface together with the colour it is attenuated by.
    """
    scattered: Ray
    attenuation: Colour

class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials are never mutated after construction, so a single instance may
    be shared by any number of surfaces and render threads.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Optional[Scattered]:
        """
        Computes the scattered ray and attenuation.
        Returns a Scattered result, or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")
