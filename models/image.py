import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Assumed when a photo arrives without usable dimensions (1920x1080)
DEFAULT_ASPECT_RATIO = 1920 / 1080

_LANDSCAPE_MIN_RATIO = 1.2
_PORTRAIT_MAX_RATIO = 0.85

Orientation = Literal["landscape", "portrait", "square"]


class ImageDescriptor(BaseModel):
    """One photograph available for layout.

    Only `id`, `width` and `height` matter to the planner. Everything else
    (URLs, captions, focal point, arbitrary extra keys from the data layer)
    is carried through untouched so the renderer receives it back.

    Dimensions are best-effort: missing, zero, negative or non-numeric values
    are stored as None ("unknown") instead of failing validation.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    width: int | None = None
    height: int | None = None
    url: str | None = None
    title: str = ""  # title of the gallery the image belongs to
    caption: str | None = None
    focal_x: float | None = None  # percent, 0-100
    focal_y: float | None = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def unknown_if_unusable(cls, v: object) -> int | None:
        if isinstance(v, bool):
            return None
        try:
            size = int(v)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return None
        return size if size > 0 else None

    @field_validator("focal_x", "focal_y", mode="before")
    @classmethod
    def focal_none_if_unusable(cls, v: object) -> float | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            value = float(v)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None

    @property
    def has_dimensions(self) -> bool:
        return self.width is not None and self.height is not None

    @property
    def aspect_ratio(self) -> float:
        """width / height, or DEFAULT_ASPECT_RATIO when either is unknown."""
        if not self.has_dimensions:
            return DEFAULT_ASPECT_RATIO
        return self.width / self.height

    @property
    def orientation(self) -> Orientation:
        ratio = self.aspect_ratio
        if ratio > _LANDSCAPE_MIN_RATIO:
            return "landscape"
        if ratio < _PORTRAIT_MAX_RATIO:
            return "portrait"
        return "square"

    @property
    def object_position(self) -> str:
        """CSS object-position for the focal point, e.g. '30% 50%'."""
        return f"{_focal_percent(self.focal_x):g}% {_focal_percent(self.focal_y):g}%"


def _focal_percent(value: float | None) -> float:
    if value is None:
        return 50.0
    return min(100.0, max(0.0, value))


class ImageSet(BaseModel):
    images: list[ImageDescriptor] = Field(default_factory=list)

    def by_id(self, image_id: str) -> ImageDescriptor | None:
        return next((img for img in self.images if img.id == image_id), None)
