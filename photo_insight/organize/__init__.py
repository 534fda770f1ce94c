"""Filing copies of analyzed images on disk."""

from .category_sorter import add_image_to_folder, category_folder

__all__ = ["add_image_to_folder", "category_folder"]
