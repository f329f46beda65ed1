# geometry/world.py
from typing import Iterable, List, Optional

from raytracer.core.ray import Ray
from raytracer.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """
    An ordered list of Hittable objects. Order only affects which of two
    equally distant hits wins, never whether the closest one is found.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __iter__(self):
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
