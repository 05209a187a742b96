# camera/__init__.py
from weekend.camera.camera import Camera

__all__ = ["Camera"]
