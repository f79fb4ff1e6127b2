# palette_cut/image_io.py
from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageCms, ImageOps

"""
Image loading for the command-line front end: any Pillow-readable file to an
sRGB RGBA uint8 buffer. The quantization core never decodes images itself.
"""


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")
    if not icc_bytes:
        return im.convert("RGBA")

    try:
        src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
        dst_prof = ImageCms.createProfile("sRGB")
        converted = ImageCms.profileToProfile(
            im.convert("RGBA"),
            src_prof,
            dst_prof,
            renderingIntent=ImageCms.Intent.PERCEPTUAL,
            outputMode="RGBA",
        )
    except (OSError, ValueError, ImageCms.PyCMSError):
        # unreadable or unsupported profile: keep the raw channels
        return im.convert("RGBA")
    return converted if converted is not None else im.convert("RGBA")


def load_image_rgba(path: Path) -> np.ndarray:
    """Load an image with Pillow as a uint8 (H, W, 4) RGBA array, orientation applied."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    return np.array(im, dtype=np.uint8)


__all__ = ["load_image_rgba"]
