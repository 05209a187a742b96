# settings.py
from dataclasses import dataclass, replace
from typing import Optional

# Samples per pixel and bounce limit for each named quality level.
QUALITY_PRESETS = {
    "interactive": {"samples": 1, "bounces": 2},
    "balanced": {"samples": 4, "bounces": 4},
    "high_quality": {"samples": 8, "bounces": 6},
    "final": {"samples": 20, "bounces": 50},
}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RenderSettings:
    """
    Everything the renderer needs besides the world and the camera.

    worker_count=None means one worker per core, as reported by
    weekend.renderer.workers.physical_core_count().
    """
    width: int
    height: int
    samples_per_pixel: int = QUALITY_PRESETS["final"]["samples"]
    max_depth: int = QUALITY_PRESETS["final"]["bounces"]
    worker_count: Optional[int] = None

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def validate(self) -> "RenderSettings":
        """Raise ValueError on settings no render could start with."""
        for name in ("width", "height", "samples_per_pixel"):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not _is_int(self.max_depth) or self.max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {self.max_depth!r}")
        if self.worker_count is not None and (not _is_int(self.worker_count) or self.worker_count < 1):
            raise ValueError(f"worker_count must be a positive integer, got {self.worker_count!r}")
        return self

    def with_overrides(self, **changes) -> "RenderSettings":
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_preset(cls, name: str, width: int, aspect_ratio: float = 16 / 9,
                    worker_count: Optional[int] = None) -> "RenderSettings":
        try:
            quality = QUALITY_PRESETS[name]
        except KeyError:
            raise ValueError(f"Unknown quality preset {name!r}; choose from {sorted(QUALITY_PRESETS)}") from None
        height = max(1, int(width / aspect_ratio))
        return cls(
            width=width,
            height=height,
            samples_per_pixel=quality["samples"],
            max_depth=quality["bounces"],
            worker_count=worker_count,
        )
