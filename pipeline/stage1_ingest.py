"""Stage 1: Ingest — collect the gallery's images in display order.

Two sources, checked in this order:
  1. data/images.json — image descriptors exported by the gallery's data
     layer, either a bare list or {"images": [...]}. Order is kept as given.
  2. data/photos/ — a folder of image files, sorted by filename. Pixel
     dimensions are read with Pillow; unreadable files are kept with unknown
     dimensions so they still get a place in the layout.

Reads:  data/images.json or data/photos/
Writes: data/.cache/images.json  (ImageSet)
"""
import json
import logging
from pathlib import Path

from PIL import Image

from models.image import ImageDescriptor, ImageSet
from settings import Settings

logger = logging.getLogger(__name__)

_PHOTO_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})

_EXIF_ORIENTATION_TAG = 274

# EXIF orientation values that swap width/height for display
_TRANSPOSING_ORIENTATIONS = frozenset({5, 6, 7, 8})


def run(settings: Settings) -> ImageSet:
    """Build the ImageSet and write images.json to the cache.

    Raises ValueError if two images share an id or an exported object has
    no "images" key.
    """
    if settings.images_path.exists():
        image_set = _load_exported(settings.images_path)
        source = settings.images_path
    else:
        image_set = ImageSet(images=_inventory_photos(settings))
        source = settings.photos_dir

    _check_unique_ids(image_set)

    artifact_path = settings.images_cache_path
    settings.cache_dir.mkdir(parents=True, exist_ok=True)
    artifact_path.write_text(image_set.model_dump_json(indent=2), encoding="utf-8")

    unknown = sum(1 for img in image_set.images if not img.has_dimensions)
    logger.info("Stage 1 complete → %s", artifact_path)
    logger.info("  Source:             %s", source)
    logger.info("  Images:             %d", len(image_set.images))
    logger.info("  Unknown dimensions: %d", unknown)

    return image_set


# ---------------------------------------------------------------------------
# Exported image list
# ---------------------------------------------------------------------------

def _load_exported(path: Path) -> ImageSet:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"images": data}
    elif isinstance(data, dict) and "images" not in data:
        raise ValueError(f"{path.name} has no 'images' list")
    return ImageSet.model_validate(data)


# ---------------------------------------------------------------------------
# Photo folder
# ---------------------------------------------------------------------------

def _inventory_photos(settings: Settings) -> list[ImageDescriptor]:
    if not settings.photos_dir.exists():
        logger.warning("Photos directory not found: %s", settings.photos_dir)
        return []

    photo_files = sorted(
        f for f in settings.photos_dir.iterdir()
        if f.is_file() and f.suffix.lower() in _PHOTO_EXTENSIONS
    )

    return [
        _read_photo(path, index, settings.project_dir)
        for index, path in enumerate(photo_files, start=1)
    ]


def _read_photo(path: Path, index: int, project_dir: Path) -> ImageDescriptor:
    width = height = None
    try:
        with Image.open(path) as img:
            width, height = img.size
            orientation_tag = img.getexif().get(_EXIF_ORIENTATION_TAG, 1)
        # Swap dimensions for rotationally transposed images so
        # orientation reflects how the image is actually displayed.
        if orientation_tag in _TRANSPOSING_ORIENTATIONS:
            width, height = height, width
    except (OSError, Image.DecompressionBombError) as exc:
        logger.warning("Could not read image size for %s: %s", path.name, exc)

    return ImageDescriptor(
        id=f"photo_{index:03d}",
        url=path.relative_to(project_dir).as_posix(),
        width=width,
        height=height,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _check_unique_ids(image_set: ImageSet) -> None:
    seen: set[str] = set()
    for img in image_set.images:
        if img.id in seen:
            raise ValueError(f"duplicate image id: {img.id}")
        seen.add(img.id)
