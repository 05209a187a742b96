# geometry/world.py
from typing import Iterator, List, Optional
from weekend.core.ray import Ray
from weekend.geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    An ordered list of Hittable objects, swept linearly for the closest hit.

    The list is built once and then only read, so the same instance is shared
    between all render workers.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
