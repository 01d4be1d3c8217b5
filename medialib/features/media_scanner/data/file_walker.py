import os
from pathlib import Path
from typing import Iterator, Optional
from ..domain.interfaces import IFileWalker, DirFilter

class LocalFileWalker(IFileWalker):
    """
    Concrete implementation using standard os.walk for efficiency.
    File-level filtering is left to the caller; only directories are pruned here.
    """

    def walk(self, root: Path, recursive: bool, dir_filter: Optional[DirFilter] = None) -> Iterator[Path]:
        if not recursive:
            # Non-recursive: just iterate the immediate directory
            for item in sorted(root.iterdir()):
                yield item
            return

        # Top-down os.walk yields a directory before its children: "self first"
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)

            # Modifying 'dirnames' in place tells os.walk to skip them
            dirnames[:] = sorted(
                d for d in dirnames
                if dir_filter is None or dir_filter(current / d)
            )

            for filename in sorted(filenames):
                yield current / filename
