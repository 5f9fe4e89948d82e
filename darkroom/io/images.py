"""
Image file I/O for darkroom
Decodes images and masks into numpy buffers with Pillow and encodes results back
"""

from pathlib import Path
from typing import Union
import logging

import numpy as np
from PIL import Image

from ..processing.pixels import validate_pixels

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike) -> np.ndarray:
    """
    Load an image file as an RGBA pixel buffer

    Args:
        path: Any image format Pillow can decode

    Returns:
        (H, W, 4) uint8 array; images without alpha are fully opaque
    """
    with Image.open(path) as image:
        rgba = np.array(image.convert('RGBA'), dtype=np.uint8)
    logger.debug(f"Loaded {path}: {rgba.shape[1]}x{rgba.shape[0]}")
    return rgba


def load_mask(path: PathLike) -> np.ndarray:
    """
    Load a mask image

    Images with an alpha channel are kept as RGBA so that strokes painted on
    a transparent surface keep their coverage; everything else is read as
    grayscale.

    Returns:
        (H, W, 4) uint8 array for images with alpha, else (H, W) uint8
    """
    with Image.open(path) as image:
        has_alpha = 'A' in image.getbands() or 'transparency' in image.info
        mode = 'RGBA' if has_alpha else 'L'
        mask = np.array(image.convert(mode), dtype=np.uint8)
    logger.debug(f"Loaded mask {path} as {mode}")
    return mask


def save_image(pixels: np.ndarray, path: PathLike) -> Path:
    """
    Save an RGBA pixel buffer

    Formats without alpha support (JPEG) receive the RGB channels only.

    Returns:
        The path written
    """
    validate_pixels(pixels)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    image = Image.fromarray(pixels)
    if path.suffix.lower() in ('.jpg', '.jpeg'):
        image = image.convert('RGB')
    image.save(path)
    logger.info(f"Saved image to {path}")
    return path
