from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def category_folder(category: str, root: Path | None = None) -> Path:
    """Folder for a category name under root (default: current working directory)."""
    name = category.strip()
    if not name or name in {".", ".."} or "/" in name or (os.sep != "/" and os.sep in name):
        raise ValueError(f"Category name cannot be used as a folder name: {category!r}")
    base = root if root is not None else Path.cwd()
    return base / name


def add_image_to_folder(image_file: Path, category: str, root: Path | None = None) -> Path:
    """Copy image_file into the folder named after category, replacing any earlier copy."""
    folder = category_folder(category, root)
    folder.mkdir(parents=True, exist_ok=True)
    dest = folder / Path(image_file).name
    shutil.copyfile(image_file, dest)
    logger.debug("Copied %s into %s", image_file, folder)
    return dest
