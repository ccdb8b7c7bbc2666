"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace)
and re-export the modules the editing engine draws with.

This module loads the Pillow-provided modules via importlib and re-exports
`Image`, `ImageDraw`, `ImageEnhance` and `ImageFilter`, plus the resampling
filter used for every scale operation.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageDraw = import_module("PIL.ImageDraw")
ImageEnhance = import_module("PIL.ImageEnhance")
ImageFilter = import_module("PIL.ImageFilter")

# High quality downscale/upscale filter for content scaling
RESAMPLE = Image.Resampling.LANCZOS
