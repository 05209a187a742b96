# core/__init__.py
from weekend.core.vector import Vector3, Point3, Colour
from weekend.core.ray import Ray

__all__ = ["Vector3", "Point3", "Colour", "Ray"]
