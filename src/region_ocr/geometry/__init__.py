"""Геометрия кропа и отображения."""

from .crop_resolver import CropResolver
from .display import fit_display_size

__all__ = ["CropResolver", "fit_display_size"]
