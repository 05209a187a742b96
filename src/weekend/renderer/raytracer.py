# renderer/raytracer.py
import logging
import math
import random
import threading
import time
from typing import List, Optional

import numpy as np

from weekend.camera.camera import Camera
from weekend.core.ray import Ray
from weekend.core.vector import Colour
from weekend.geometry.hittable import Hittable
from weekend.materials.presets import ColorPresets
from weekend.renderer.canvas import Canvas
from weekend.renderer.cpu_kernels import T_MIN, trace_rows
from weekend.renderer.scene_data import camera_frame, flatten_world
from weekend.renderer.workers import physical_core_count, rows_for_worker
from weekend.settings import RenderSettings

logger = logging.getLogger(__name__)


def sky_color(ray: Ray) -> Colour:
    """Vertical white-to-blue gradient; the only light in the scene."""
    unit_direction = ray.direction.unit_vector()
    t = 0.5 * (unit_direction.y + 1.0)
    return ColorPresets.WHITE * (1.0 - t) + ColorPresets.SKY_BLUE * t


def ray_color(ray: Ray, world: Hittable, depth: int, rng=random) -> Colour:
    """
    Radiance arriving along ray, following at most depth bounces.

    A path that runs out of bounces contributes no light. This is the object
    form of the tracer, used for worlds the compiled kernels cannot flatten.
    """
    if depth <= 0:
        return ColorPresets.BLACK

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return sky_color(ray)

    result = rec.material.scatter(ray, rec, rng)
    if result is None:
        return ColorPresets.BLACK
    return result.attenuation * ray_color(result.scattered, world, depth - 1, rng)

def render_rows(world: Hittable, camera: Camera, canvas: Canvas, rows,
                samples_per_pixel: int, max_depth: int, rng=random):
    """
    Sample every pixel of the given canvas rows and write them out.

    rows are counted from the top of the canvas; the camera's t coordinate
    runs from the bottom, so row r is image row height - 1 - r.
    """
    width, height = canvas.width, canvas.height
    u_scale = 1.0 / max(width - 1, 1)
    v_scale = 1.0 / max(height - 1, 1)
    linear_row = np.zeros((width, 3), dtype=np.float64)

    for row in rows:
        j = height - 1 - row
        for x in range(width):
            pixel = ColorPresets.BLACK
            for _ in range(samples_per_pixel):
                u = (x + rng.random()) * u_scale
                v = (j + rng.random()) * v_scale
                ray = camera.get_ray(u, v, rng)
                pixel = pixel + ray_color(ray, world, max_depth, rng)
            linear_row[x] = (pixel.x, pixel.y, pixel.z)
        canvas.write_row(row, linear_row, samples_per_pixel)


class RenderJob:
    """
    A render pass running on a pool of worker threads.

    canvas fills in as workers finish rows and may be read at any time, for
    example by a display loop polling is_finished() once per frame.
    """
    def __init__(self, canvas: Canvas, worker_count: int, compiled: bool = True):
        self.canvas = canvas
        self.worker_count = worker_count
        # False when the world had to be traced as Python objects
        self.compiled = compiled
        self.threads: List[threading.Thread] = []
        self.errors: List[Exception] = []
        self.started_at = time.perf_counter()
        self.finished_at: Optional[float] = None
        self._remaining = worker_count
        self._lock = threading.Lock()

    def active_workers(self) -> int:
        with self._lock:
            return self._remaining

    def is_finished(self) -> bool:
        return self.active_workers() == 0

    def wait(self) -> Canvas:
        """Join every worker; re-raises the first error any of them hit."""
        for thread in self.threads:
            thread.join()
        if self.errors:
            raise self.errors[0]
        return self.canvas

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.perf_counter()
        return end - self.started_at

    def _worker_done(self, error: Optional[Exception] = None):
        with self._lock:
            if error is not None:
                self.errors.append(error)
            self._remaining -= 1
            if self._remaining == 0:
                self.finished_at = time.perf_counter()


class Renderer:
    """
    Splits the canvas into row stripes, one per worker thread.

    Worlds made of spheres with the built-in materials are flattened once into
    arrays and traced by the compiled kernels, which release the GIL. Any
    other world is traced through its objects with ray_color(). Either way the
    scene is only read while rendering and is shared by all workers. Each
    worker writes only its own rows, so the canvas needs no lock.
    """
    def __init__(self, settings: RenderSettings, core_count=physical_core_count):
        self.settings = settings.validate()
        worker_count = settings.worker_count if settings.worker_count is not None else core_count()
        if worker_count < 1:
            raise ValueError(f"worker count must be positive, got {worker_count!r}")
        # Workers beyond the number of rows would own nothing.
        self.worker_count = min(worker_count, settings.height)

    def start(self, world: Hittable, camera: Camera) -> RenderJob:
        s = self.settings
        canvas = Canvas(s.width, s.height)
        scene = flatten_world(world)
        if scene is None:
            logger.info("World has surfaces or materials the compiled tracer does not know; "
                        "tracing Python objects")
            arrays = None
        else:
            arrays = (camera_frame(camera), camera.lens_radius) + tuple(scene)
        job = RenderJob(canvas, self.worker_count, compiled=scene is not None)

        logger.info("Rendering %dx%d, %d samples/pixel, depth %d on %d workers",
                    s.width, s.height, s.samples_per_pixel, s.max_depth, self.worker_count)

        for worker_id in range(self.worker_count):
            rows = rows_for_worker(worker_id, self.worker_count, s.height)
            thread = threading.Thread(
                target=self._run_worker,
                args=(job, worker_id, world, camera, arrays, rows),
                name=f"render-worker-{worker_id}",
                daemon=True,
            )
            job.threads.append(thread)

        for thread in job.threads:
            thread.start()
        return job

    def render(self, world: Hittable, camera: Camera) -> Canvas:
        job = self.start(world, camera)
        canvas = job.wait()
        logger.info("Render finished in %.2fs", job.elapsed)
        return canvas

    def _run_worker(self, job: RenderJob, worker_id: int, world, camera, arrays, rows):
        s = self.settings
        try:
            if arrays is not None:
                trace_rows(np.array(rows, dtype=np.int64), job.canvas.pixels,
                           s.samples_per_pixel, s.max_depth, *arrays)
            else:
                # Unseeded: sample positions only need to differ, not to repeat.
                rng = random.Random()
                render_rows(world, camera, job.canvas, rows, s.samples_per_pixel, s.max_depth, rng)
        except Exception as e:
            # Handed to the caller through RenderJob.wait()
            logger.exception("Worker %d failed", worker_id)
            job._worker_done(e)
            return
        job._worker_done()
        logger.debug("Worker %d finished %d rows", worker_id, len(rows))


def render(world: Hittable, camera: Camera, width: int, height: int,
           samples_per_pixel: int, max_depth: int, worker_count: Optional[int] = None) -> Canvas:
    """
    Render world through camera into a new width x height canvas.

    Blocks until every worker has finished. Raises ValueError for settings
    that cannot produce an image.
    """
    settings = RenderSettings(width, height, samples_per_pixel, max_depth, worker_count)
    return Renderer(settings).render(world, camera)
