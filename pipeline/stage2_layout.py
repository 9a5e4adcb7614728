"""Stage 2: Layout Planning — arrange a gallery's images into spreads.

Consumes the ImageSet from Stage 1 and produces a SpreadPlan: an ordered list
of spreads, each naming a layout kind (hero, split, trio, quad, ...) and the
images it shows.

Layout decisions:
  - The first image always opens the gallery as a one-image "hero" spread.
  - Every later spread is chosen from the theme's rule table: the first rule
    whose period matches the spread index and whose image requirements fit
    the images left wins; otherwise the theme's one-image fallback is used.
  - Spreads partition the input: concatenating their images gives back the
    input sequence exactly, with nothing dropped or repeated.

The planner itself (`plan`) is a pure function; `run` adds the theme lookup
and the cache artifact.

Reads:  data/.cache/images.json       (ImageSet)
        data/themes/<theme>.yaml      (optional Theme override)
Writes: data/.cache/spread_plan.json  (SpreadPlan)
"""
import logging
from collections.abc import Sequence

from models.image import ImageDescriptor, ImageSet
from models.spread import MAX_CARDINALITY, Spread, SpreadPlan
from models.theme import EDITORIAL, LayoutRule, Theme
from settings import Settings

logger = logging.getLogger(__name__)


def run(
    settings: Settings,
    image_set: ImageSet,
    theme: Theme | None = None,
) -> SpreadPlan:
    """Build the SpreadPlan and write spread_plan.json.

    Returns the completed SpreadPlan.
    """
    if theme is None:
        theme = Theme.resolve(settings.theme, settings.themes_dir)

    spread_plan = SpreadPlan(theme=theme.name, spreads=plan(image_set.images, theme))

    artifact_path = settings.spread_plan_path
    settings.cache_dir.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(spread_plan.model_dump_json(indent=2), encoding="utf-8")

    logger.info("Stage 2 complete → %s", artifact_path)
    logger.info("  Theme:   %s", theme.name)
    logger.info("  Images:  %d", len(image_set.images))
    logger.info("  Spreads: %d", len(spread_plan.spreads))
    _log_spread_summary(spread_plan.spreads)

    return spread_plan


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

def plan(images: Sequence[ImageDescriptor], theme: Theme = EDITORIAL) -> list[Spread]:
    """Partition `images` into spreads following `theme`'s rule table.

    Deterministic and total: the same input always gives the same spreads,
    an empty input gives [], and no input ever raises.
    """
    images = list(images)
    if not images:
        return []

    spreads: list[Spread] = [Spread(kind=theme.lead, images=images[:1])]
    cursor = 1

    while cursor < len(images):
        remaining = len(images) - cursor
        upcoming = images[cursor:cursor + MAX_CARDINALITY]
        rule = _pick_rule(theme, len(spreads), remaining, upcoming)
        if rule is None:
            spreads.append(Spread(kind=theme.fallback, images=upcoming[:1]))
            cursor += 1
            continue
        spreads.append(Spread(kind=rule.kind, images=upcoming[:rule.size]))
        cursor += rule.size

    return spreads


def _pick_rule(
    theme: Theme,
    spread_index: int,
    remaining: int,
    upcoming: list[ImageDescriptor],
) -> LayoutRule | None:
    for rule in theme.rules:
        if rule.matches(spread_index, remaining, upcoming):
            return rule
    return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _log_spread_summary(spreads: list[Spread]) -> None:
    counts: dict[str, int] = {}
    for s in spreads:
        counts[s.kind] = counts.get(s.kind, 0) + 1
    for kind, count in sorted(counts.items()):
        logger.info("  %-16s %d", kind, count)
