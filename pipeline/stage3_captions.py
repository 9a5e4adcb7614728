"""Stage 3: Captions — attach magazine-style captions to a finished plan.

Captions are decoration only: they never change which images a spread holds.
Each image gets one Caption chosen from a fixed rotation keyed by its running
number (spread_index * 3 + position) and the spread's layout kind, so most
images stay uncaptioned and the rest alternate between a word, a short title,
a number overlay or the full title.

Reads:  data/.cache/spread_plan.json  (SpreadPlan)
Writes: data/.cache/spread_plan.json  (SpreadPlan, captions filled in)
"""
import logging
import re
from collections.abc import Sequence

from models.spread import Caption, Spread, SpreadPlan
from settings import Settings

logger = logging.getLogger(__name__)

_TITLE_SEPARATORS = re.compile(r"[|\-–—,]")

# Caption rotation for kinds without a rule of their own, indexed by running
# number % 12. Entries are (text source, style, position).
_ROTATION: list[tuple[str | None, str, str]] = [
    (None, "none", "below"),
    ("first_word", "minimal", "below"),
    (None, "none", "below"),
    ("short_title", "short", "below"),
    (None, "none", "below"),
    ("number", "number", "overlay"),
    ("last_word", "minimal", "below"),
    (None, "none", "below"),
    ("full_title", "full", "below"),
    (None, "none", "below"),
    ("first_segment", "short", "side"),
    (None, "none", "below"),
]

_NO_CAPTION = Caption(text=None, style="none", position="below")


def run(settings: Settings, spread_plan: SpreadPlan, title: str | None = None) -> SpreadPlan:
    """Caption every spread and rewrite spread_plan.json.

    `title` defaults to settings.gallery_title. Returns the captioned plan.
    """
    if title is None:
        title = settings.gallery_title

    captioned = SpreadPlan(
        theme=spread_plan.theme,
        spreads=decorate(spread_plan.spreads, title),
    )

    artifact_path = settings.spread_plan_path
    settings.cache_dir.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(captioned.model_dump_json(indent=2), encoding="utf-8")

    shown = sum(
        1 for s in captioned.spreads for c in s.captions if c.style != "none"
    )
    logger.info("Stage 3 complete → %s", artifact_path)
    logger.info("  Captions shown: %d", shown)

    return captioned


def decorate(spreads: Sequence[Spread], title: str | None = None) -> list[Spread]:
    """Return copies of `spreads` with one caption per image.

    Each image is captioned from its own gallery title, falling back to
    `title` and then to an empty string.
    """
    decorated: list[Spread] = []
    for spread_index, spread in enumerate(spreads):
        captions = [
            caption_for(spread, spread_index, position, image.title or title or "")
            for position, image in enumerate(spread.images)
        ]
        decorated.append(spread.model_copy(update={"captions": captions}))
    return decorated


def caption_for(spread: Spread, spread_index: int, position: int, title: str) -> Caption:
    """Pick the caption for the image at `position` within `spread`."""
    number = spread_index * 3 + position
    parts = _TitleParts(title)

    if spread.kind == "trio":
        # Only the first image of a trio is captioned
        if position == 0:
            return _caption(parts.short_title, "short", "below")
        return _NO_CAPTION

    if spread.kind == "split":
        if position % 2 == 0:
            return _caption(parts.first_word, "minimal", "below")
        return _NO_CAPTION

    if spread.kind == "duo-stacked":
        # Bottom image carries a subtle number
        if position == 1:
            return _caption(_number_label(number), "number", "overlay")
        return _NO_CAPTION

    source, style, caption_position = _ROTATION[number % len(_ROTATION)]
    if source is None:
        return _NO_CAPTION
    if source == "number":
        return _caption(_number_label(number), style, caption_position)
    return _caption(getattr(parts, source), style, caption_position)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _TitleParts:
    """Pieces of a gallery title, e.g. 'Christmas Market | Vienna, 2024'."""

    def __init__(self, title: str) -> None:
        self.segments = [s.strip() for s in _TITLE_SEPARATORS.split(title) if s.strip()]
        self.full_title = title.strip() if self.segments else ""

    @property
    def first_segment(self) -> str:
        return self.segments[0] if self.segments else ""

    @property
    def first_word(self) -> str:
        if not self.segments:
            return ""
        return self.segments[0].split()[0]

    @property
    def last_word(self) -> str:
        if not self.segments:
            return ""
        return self.segments[-1].split()[-1]

    @property
    def short_title(self) -> str:
        if not self.segments:
            return ""
        return " ".join(self.segments[0].split()[:2])


def _number_label(number: int) -> str:
    return f"№{number + 1:02d}"


def _caption(text: str | None, style: str, position: str) -> Caption:
    if not text:
        return _NO_CAPTION
    return Caption(text=text, style=style, position=position)
