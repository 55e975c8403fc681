"""
Render parameters for the image-to-character pipeline.

Parameters are an immutable value passed explicitly into the engine. They can
be built from defaults, loaded from a JSON file and overridden field by field:

    params = RenderParams.load("render.json").replace(downsample_rate=4)
    engine = EdgeEngine(params)
"""

from __future__ import annotations

import dataclasses
import json
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from image2ascii.charsets import EDGE_ASCII, GRAY_ASCII, as_palette
from image2ascii.errors import InvalidDownsampleRate, InvalidParameter

DEFAULT_DOWNSAMPLE_RATE = 8
DEFAULT_EDGE_SOBEL_THRESHOLD = 50


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class RenderParams:
    downsample_rate: int = DEFAULT_DOWNSAMPLE_RATE
    edge_sobel_threshold: float = DEFAULT_EDGE_SOBEL_THRESHOLD
    edge_palette: tuple[str, ...] = tuple(EDGE_ASCII)
    gray_palette: tuple[str, ...] = tuple(GRAY_ASCII)
    workers: int | None = None

    def validate(self) -> RenderParams:
        """Check the parameters, returning a copy with palettes normalised to tuples."""
        if not _is_int(self.downsample_rate) or self.downsample_rate <= 0:
            raise InvalidDownsampleRate(self.downsample_rate)
        threshold = self.edge_sobel_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real) or not threshold >= 0:
            raise InvalidParameter(f"edge_sobel_threshold must be a non-negative number, got {threshold!r}")
        if self.workers is not None and (not _is_int(self.workers) or self.workers <= 0):
            raise InvalidParameter(f"workers must be a positive integer, got {self.workers!r}")
        gray = as_palette(self.gray_palette, "gray")
        edge = as_palette(self.edge_palette, "edge")
        return dataclasses.replace(
            self, downsample_rate=int(self.downsample_rate), edge_palette=edge, gray_palette=gray
        )

    def replace(self, **overrides: Any) -> RenderParams:
        """Return a copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> RenderParams:
        """Merge a mapping over the defaults; unknown keys are ignored."""
        names = {f.name for f in dataclasses.fields(cls)}
        known = {k: v for k, v in data.items() if k in names}
        for key in ("edge_palette", "gray_palette"):
            if isinstance(known.get(key), (str, list)):
                known[key] = tuple(known[key])
        return cls().replace(**known)

    @classmethod
    def load(cls, path: str | Path) -> RenderParams:
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {path}")
        return cls.from_mapping(data)
