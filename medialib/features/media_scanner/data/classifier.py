import re
from pathlib import PurePath


class PathClassifier:
    """
    Decides from a file name alone whether a file is worth looking up.
    """

    ALLOWED_EXTENSIONS = frozenset({
        "jpg", "jpeg", "png", "gif", "webp", "bmp", "tif", "tiff"
    })

    # e.g. photo-150x150.jpg, produced when the catalog generates size variants
    INTERMEDIATE_PATTERN = re.compile(
        r"^.+-\d+x\d+\.(jpe?g|png|gif|webp|bmp|tiff?)$", re.IGNORECASE
    )

    @staticmethod
    def extension_of(name: str) -> str:
        return PurePath(name).suffix.lstrip(".").lower()

    @classmethod
    def is_candidate_extension(cls, name: str) -> bool:
        return cls.extension_of(name) in cls.ALLOWED_EXTENSIONS

    @classmethod
    def is_intermediate_variant(cls, name: str) -> bool:
        return cls.INTERMEDIATE_PATTERN.match(name) is not None

    @staticmethod
    def is_hidden(name: str) -> bool:
        return name.startswith(".")
