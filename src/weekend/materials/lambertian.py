# materials/lambertian.py
import random
from weekend.core.ray import Ray
from weekend.core.vector import Colour
from weekend.core.utils import random_unit_vector
from weekend.geometry.hittable import HitRecord
from weekend.materials.material import Material, Scattered

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Colour):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> Scattered:
        """
        Scatter a ray according to a Lambertian reflection model.
        """
        # Pick a random scatter direction by adding a random vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Scattered(Ray(rec.p, scatter_direction), self.albedo)

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
