# renderer/__init__.py
from weekend.renderer.canvas import Canvas
from weekend.renderer.raytracer import Renderer, RenderJob, ray_color, render
from weekend.renderer.workers import physical_core_count, rows_for_worker

__all__ = ["Canvas", "Renderer", "RenderJob", "ray_color", "render",
           "physical_core_count", "rows_for_worker"]
