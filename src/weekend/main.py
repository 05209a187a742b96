# main.py
import argparse
import logging
import sys
from typing import Optional

import numpy as np
import pygame

from weekend.renderer.raytracer import Renderer, RenderJob
from weekend.scenes import COVER_SEED, SCENES, load_scene
from weekend.settings import QUALITY_PRESETS, RenderSettings
from weekend.sinks import ImageFileSink, PixelSink, present_canvas

WINDOW_TITLE = "Raytracing In One Weekend"
PROGRESS_TEXT = "Tracing Rays..."


class Application:
    """
    Window that shows a render pass while it is being traced.

    The window is the pixel sink: every frame it presents the canvas as it
    currently stands and, until all workers report finished, draws the
    progress text over it.
    """
    def __init__(self, settings: RenderSettings, world, camera, output=None):
        pygame.init()
        self.settings = settings
        self.world = world
        self.camera = camera
        self.output = output
        self.output_sink: Optional[PixelSink] = ImageFileSink(output) if output else None

        self.screen = pygame.display.set_mode((settings.width, settings.height))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 32)

        self.renderer = Renderer(settings)
        self.job: RenderJob = None

    def present(self, pixels: np.ndarray, width: int, height: int) -> None:
        # surfarray is indexed [x, y]; the canvas is [row, x]
        frame_surface = pygame.surfarray.make_surface(pixels.swapaxes(0, 1))
        if (width, height) != self.screen.get_size():
            frame_surface = pygame.transform.scale(frame_surface, self.screen.get_size())
        self.screen.blit(frame_surface, (0, 0))

    def draw_progress(self):
        text_surface = self.font.render(PROGRESS_TEXT, True, (255, 0, 0))
        text_rect = text_surface.get_rect(center=self.screen.get_rect().center)
        pygame.draw.rect(self.screen, (255, 255, 255), text_rect.inflate(16, 16))
        self.screen.blit(text_surface, text_rect)

    def finish(self):
        """Called once, on the first frame after every worker is done."""
        canvas = self.job.wait()
        print(f"Scene took {self.job.elapsed:.2f} seconds to render")
        if self.output_sink is not None:
            present_canvas(self.output_sink, canvas)
            print(f"Saved image to {self.output}")

    def run(self):
        self.job = self.renderer.start(self.world, self.camera)
        print(f"Tracing on {self.renderer.worker_count} workers...")
        finished = False
        try:
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False

                self.screen.fill((255, 255, 255))
                present_canvas(self, self.job.canvas)

                if not finished:
                    if self.job.is_finished():
                        finished = True
                        self.finish()
                    else:
                        self.draw_progress()

                pygame.display.flip()
                self.clock.tick(60)
        finally:
            pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="weekend",
        description="Render a sphere scene with a multi-threaded path tracer.",
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="cover",
                        help="scene to render (default: cover)")
    parser.add_argument("--quality", choices=list(QUALITY_PRESETS), default="final",
                        help="samples/bounces preset (default: final)")
    parser.add_argument("--width", type=int, default=800, help="image width in pixels")
    parser.add_argument("--aspect-ratio", type=float, default=16 / 9,
                        help="width / height (default: 16/9)")
    parser.add_argument("--samples", type=int, default=None,
                        help="samples per pixel, overrides the preset")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="maximum bounces per path, overrides the preset")
    parser.add_argument("--workers", type=int, default=None,
                        help="worker threads (default: one per core)")
    parser.add_argument("--seed", type=int, default=COVER_SEED,
                        help=f"layout seed for the cover scene (default: {COVER_SEED})")
    parser.add_argument("-o", "--output", default=None,
                        help="save the finished image to this path (png, bmp, ...)")
    parser.add_argument("--no-window", action="store_true",
                        help="render without opening a window; requires --output")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    if args.no_window and not args.output:
        parser.error("--no-window needs --output")
    if args.aspect_ratio <= 0:
        parser.error("--aspect-ratio must be positive")
    try:
        args.settings = build_settings(args)
    except ValueError as e:
        parser.error(str(e))
    return args


def build_settings(args: argparse.Namespace) -> RenderSettings:
    settings = RenderSettings.from_preset(args.quality, args.width, args.aspect_ratio, args.workers)
    settings = settings.with_overrides(samples_per_pixel=args.samples, max_depth=args.max_depth)
    return settings.validate()


def render_headless(settings: RenderSettings, world, camera, output) -> None:
    renderer = Renderer(settings)
    print(f"Rendering {settings.width}x{settings.height} on {renderer.worker_count} workers...")
    job = renderer.start(world, camera)
    canvas = job.wait()
    print(f"Scene took {job.elapsed:.2f} seconds to render")
    sink: PixelSink = ImageFileSink(output)
    present_canvas(sink, canvas)
    print(f"Saved image to {output}")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = args.settings
    world, camera = load_scene(args.scene, settings.aspect_ratio, args.seed)
    print(f"Scene '{args.scene}' has {len(world)} spheres")

    if args.no_window:
        render_headless(settings, world, camera, args.output)
    else:
        Application(settings, world, camera, args.output).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
