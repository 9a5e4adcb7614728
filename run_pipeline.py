#!/usr/bin/env python3
"""Plan the spreads for a gallery end-to-end.

Usage:
    python run_pipeline.py                      # run all stages
    python run_pipeline.py --theme album        # use another layout theme
    python run_pipeline.py --from-stage 2       # start from stage 2 (load images from cache)
    python run_pipeline.py --no-captions        # stop after layout
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from settings import Settings
from models.image import ImageSet
from models.spread import SpreadPlan
from models.theme import Theme
from pipeline import stage1_ingest, stage2_layout, stage3_captions

logger = logging.getLogger("run_pipeline")


def _load_json(path: Path, model):
    data = json.loads(path.read_text(encoding="utf-8"))
    return model.model_validate(data)


def main(argv: list[str] | None = None) -> SpreadPlan:
    parser = argparse.ArgumentParser()
    parser.add_argument("--from-stage", type=int, default=1, choices=(1, 2, 3), dest="from_stage",
                        help="Start from this stage number (1-3); earlier stages load from cache")
    parser.add_argument("--theme", help="Layout theme name (default: settings.theme)")
    parser.add_argument("--title", help="Gallery title used for captions")
    parser.add_argument("--no-captions", action="store_false", dest="captions", default=None,
                        help="Skip the caption stage")
    args = parser.parse_args(argv)

    overrides = {}
    if args.theme:
        overrides["theme"] = args.theme
    if args.title is not None:
        overrides["gallery_title"] = args.title
    if args.captions is not None:
        overrides["captions"] = args.captions
    settings = Settings(**overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.from_stage <= 1:
        logger.info("=== Stage 1: Ingest ===")
        image_set = stage1_ingest.run(settings)
    else:
        logger.info("=== Stage 1: loading from cache ===")
        image_set = _load_json(settings.images_cache_path, ImageSet)

    if args.from_stage <= 2:
        logger.info("=== Stage 2: Layout ===")
        theme = Theme.resolve(settings.theme, settings.themes_dir)
        spread_plan = stage2_layout.run(settings, image_set, theme)
    else:
        logger.info("=== Stage 2: loading from cache ===")
        spread_plan = _load_json(settings.spread_plan_path, SpreadPlan)

    if settings.captions:
        logger.info("=== Stage 3: Captions ===")
        spread_plan = stage3_captions.run(settings, spread_plan)

    logger.info("=== Done → %s ===", settings.spread_plan_path)
    return spread_plan


if __name__ == "__main__":
    main()
