import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..domain.interfaces import IMimeProbe

logger = logging.getLogger(__name__)

class PillowMimeProbe(IMimeProbe):
    """
    Sniffs the MIME type from file content, so a text file renamed to .jpg is not an image.
    """

    def probe(self, path: Path) -> Optional[str]:
        # Only "not an image" maps to None; permission or missing-file errors propagate
        try:
            # Image.open only reads the header; pixel data stays on disk
            with Image.open(path) as img:
                return img.get_format_mimetype() or Image.MIME.get(img.format or "")
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            logger.debug(f"Could not identify {path.name} as an image: {e}")
            return None
