"""Layout themes — the rule tables that drive the spread planner.

A theme is an ordered list of rules. At each step the planner takes the first
rule that is eligible for the current spread index and the number of images
left, and falls back to a one-image kind when none is. Every visual skin of a
gallery is just a different Theme value passed to the same planner.

Themes are built in (see BUILTIN_THEMES) or loaded from
<project>/themes/<name>.yaml, which has the same shape as Theme:

    name: minimal
    fallback: single-centered
    rules:
      - {kind: split, every: 2}
      - {kind: trio, every: 3, offset: 1}
"""
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.image import ImageDescriptor, Orientation
from models.spread import LAYOUT_KINDS, LayoutKind, cardinality


class LayoutRule(BaseModel):
    """Pick `kind` when spread_index % every == offset and enough images remain.

    `min_remaining` defaults to the kind's cardinality and may not be lower,
    so a rule can never consume more images than are left. `max_remaining`
    restricts a rule to the tail of the gallery. With `orientation` set, every
    image the rule would consume must have that orientation.
    """

    model_config = ConfigDict(frozen=True)

    kind: LayoutKind
    min_remaining: int
    max_remaining: int | None = None
    every: int = Field(default=1, ge=1)
    offset: int = Field(default=0, ge=0)
    orientation: Orientation | None = None

    @model_validator(mode="before")
    @classmethod
    def default_min_remaining(cls, data: object) -> object:
        if isinstance(data, dict) and data.get("min_remaining") is None:
            kind = data.get("kind")
            if kind in LAYOUT_KINDS:
                data = {**data, "min_remaining": cardinality(kind)}
        return data

    @model_validator(mode="after")
    def check_bounds(self) -> "LayoutRule":
        size = cardinality(self.kind)
        if self.min_remaining < size:
            raise ValueError(
                f"min_remaining for '{self.kind}' must be at least {size}"
            )
        if self.max_remaining is not None and self.max_remaining < self.min_remaining:
            raise ValueError("max_remaining must not be below min_remaining")
        if self.offset >= self.every:
            raise ValueError("offset must be smaller than every")
        return self

    @property
    def size(self) -> int:
        return cardinality(self.kind)

    def matches(
        self,
        spread_index: int,
        remaining: int,
        upcoming: Sequence[ImageDescriptor],
    ) -> bool:
        """`upcoming` holds the next unplaced images, up to the largest layout."""
        if remaining < self.min_remaining:
            return False
        if self.max_remaining is not None and remaining > self.max_remaining:
            return False
        if spread_index % self.every != self.offset:
            return False
        if self.orientation is not None:
            return all(img.orientation == self.orientation for img in upcoming[:self.size])
        return True


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    lead: Literal["hero"] = "hero"
    rules: list[LayoutRule] = Field(default_factory=list)
    fallback: LayoutKind = "single-centered"

    @model_validator(mode="after")
    def fallback_takes_one_image(self) -> "Theme":
        if cardinality(self.fallback) != 1:
            raise ValueError(f"fallback '{self.fallback}' must be a one-image layout")
        return self

    @classmethod
    def load(cls, path: Path) -> "Theme":
        """Load a theme from a YAML file. The name defaults to the file stem.

        Raises FileNotFoundError if path does not exist.
        """
        import yaml  # lazy — only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if isinstance(data, dict):
            data.setdefault("name", path.stem)
        return cls.model_validate(data)

    @classmethod
    def resolve(cls, name: str, themes_dir: Path | None = None) -> "Theme":
        """Look up a theme by name: <themes_dir>/<name>.yaml first, then built-ins.

        Raises ValueError for a name that is not a plain file stem and
        KeyError for an unknown name.
        """
        if Path(name).name != name or name in ("", ".", ".."):
            raise ValueError(f"invalid theme name: {name!r}")
        if themes_dir is not None:
            path = themes_dir / f"{name}.yaml"
            if path.exists():
                return cls.load(path)
        try:
            return BUILTIN_THEMES[name]
        except KeyError:
            raise KeyError(f"unknown theme: {name!r}") from None


# Magazine style: collages every fifth spread, the odd quad, trios and splits
EDITORIAL = Theme(
    name="editorial",
    rules=[
        LayoutRule(kind="collage-right", every=10, offset=1),
        LayoutRule(kind="collage-left", every=10, offset=6),
        LayoutRule(kind="quad", every=7, offset=3),
        LayoutRule(kind="trio", every=4, offset=2),
        LayoutRule(kind="split", every=3, offset=0),
    ],
    fallback="single-centered",
)

# Portfolio page: lighter, mostly single images set off-centre
PROFILE = Theme(
    name="profile",
    rules=[
        LayoutRule(kind="trio", every=4, offset=1),
        LayoutRule(kind="split", every=3, offset=0),
        LayoutRule(kind="duo-stacked", every=5, offset=2),
        LayoutRule(kind="offset-left", every=4, offset=0),
        LayoutRule(kind="offset-right", every=4, offset=2),
    ],
    fallback="single-centered",
)

# Photo album: dense pages, with the last few images always kept together
ALBUM = Theme(
    name="album",
    rules=[
        LayoutRule(kind="trio", orientation="portrait"),
        LayoutRule(kind="offset-left", max_remaining=1),
        LayoutRule(kind="split", max_remaining=2),
        LayoutRule(kind="collage-left", max_remaining=3),
        LayoutRule(kind="split", every=4, offset=0),
        LayoutRule(kind="collage-left", every=4, offset=1),
        LayoutRule(kind="collage-right", every=4, offset=2),
        LayoutRule(kind="quad"),
    ],
    fallback="offset-left",
)

BUILTIN_THEMES: dict[str, Theme] = {t.name: t for t in (EDITORIAL, PROFILE, ALBUM)}
