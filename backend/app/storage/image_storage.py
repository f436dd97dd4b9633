"""Local filesystem content store for product images."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

PRODUCT_IMAGE_FOLDER = "product-image"


class ImageStorage:
    """Persist uploaded image bytes under ``media_dir`` and hand back a relative path.

    The returned path is what gets stored in ``product_images.image_path`` and
    is served by the ``/media`` static mount.
    """

    def __init__(self, media_dir: str | Path):
        self.media_dir = Path(media_dir)

    def _target_dir(self) -> Path:
        target = self.media_dir / PRODUCT_IMAGE_FOLDER
        target.mkdir(parents=True, exist_ok=True)
        return target

    def save(self, filename: str, file_obj: BinaryIO) -> str:
        """Write ``file_obj`` to the product image folder.

        Args:
            filename: Client-supplied filename; only its basename is kept
            file_obj: Readable binary stream

        Returns:
            Path relative to ``media_dir``, e.g. ``product-image/1700000000-shoe.png``
        """
        safe_name = Path(filename or "image").name or "image"
        relative = f"{PRODUCT_IMAGE_FOLDER}/{time.time_ns()}-{safe_name}"
        destination = self._target_dir() / Path(relative).name

        with open(destination, "wb") as dst:
            shutil.copyfileobj(file_obj, dst)

        logger.info("Saved product image to %s", destination)
        return relative

    def remove(self, relative_path: str) -> None:
        """Delete a file written by ``save``; missing files are ignored."""
        try:
            (self.media_dir / relative_path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove product image %s: %s", relative_path, e)
