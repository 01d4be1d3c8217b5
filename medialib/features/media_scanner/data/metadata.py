import re
from pathlib import Path
from typing import Any, Dict

from PIL import Image

from ..domain.interfaces import IMetadataGenerator


class PillowMetadataGenerator(IMetadataGenerator):
    """
    Reads dimensions of an original and records the size variants that already
    sit next to it on disk (photo-150x150.jpg for photo.jpg).
    Never writes or resizes anything.
    """

    def generate(self, path: Path) -> Dict[str, Any]:
        with Image.open(path) as img:
            width, height = img.size

        return {
            "width": width,
            "height": height,
            "filesize": path.stat().st_size,
            "sizes": self._existing_variants(path),
        }

    def _existing_variants(self, path: Path) -> Dict[str, Dict[str, Any]]:
        pattern = re.compile(
            rf"^{re.escape(path.stem)}-(\d+)x(\d+){re.escape(path.suffix)}$", re.IGNORECASE
        )

        sizes = {}
        for sibling in sorted(path.parent.iterdir()):
            match = pattern.match(sibling.name)
            if not match or not sibling.is_file():
                continue

            width, height = int(match.group(1)), int(match.group(2))
            sizes[f"{width}x{height}"] = {
                "file": sibling.name,
                "width": width,
                "height": height,
            }
        return sizes
