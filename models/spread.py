from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.image import ImageDescriptor

LayoutKind = Literal[
    "hero",
    "single-centered",
    "offset-left",
    "offset-right",
    "split",
    "duo-stacked",
    "trio",
    "quad",
    "collage-left",
    "collage-right",
]

LAYOUT_KINDS: tuple[str, ...] = get_args(LayoutKind)

# Number of images each layout kind holds
_CARDINALITY: dict[str, int] = {
    "hero": 1,
    "single-centered": 1,
    "offset-left": 1,
    "offset-right": 1,
    "split": 2,
    "duo-stacked": 2,
    "trio": 3,
    "quad": 4,
    "collage-left": 3,
    "collage-right": 3,
}

MAX_CARDINALITY = max(_CARDINALITY.values())


def cardinality(kind: str) -> int:
    """Return how many images a spread of `kind` consumes.

    Raises KeyError for a kind outside LayoutKind.
    """
    return _CARDINALITY[kind]


class Caption(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str | None = None
    style: Literal["full", "short", "minimal", "date", "number", "none"] = "none"
    position: Literal["below", "overlay", "side"] = "below"


class Spread(BaseModel):
    """One layout block: a layout kind and the images it shows, in order.

    The image count always equals cardinality(kind). Captions are empty until
    the caption stage runs, then hold exactly one entry per image.
    """

    model_config = ConfigDict(frozen=True)

    kind: LayoutKind
    images: list[ImageDescriptor]
    captions: list[Caption] = Field(default_factory=list)

    @model_validator(mode="after")
    def images_fill_layout(self) -> "Spread":
        expected = cardinality(self.kind)
        if len(self.images) != expected:
            raise ValueError(
                f"layout '{self.kind}' holds {expected} image(s), got {len(self.images)}"
            )
        if self.captions and len(self.captions) != len(self.images):
            raise ValueError("captions must match images one to one")
        return self


class SpreadPlan(BaseModel):
    theme: str
    spreads: list[Spread] = Field(default_factory=list)

    def images(self) -> list[ImageDescriptor]:
        """All images in display order, i.e. the planner's input."""
        return [img for spread in self.spreads for img in spread.images]
