# geometry/__init__.py
from weekend.geometry.hittable import Hittable, HitRecord
from weekend.geometry.sphere import Sphere
from weekend.geometry.world import HittableList

__all__ = ["Hittable", "HitRecord", "Sphere", "HittableList"]
