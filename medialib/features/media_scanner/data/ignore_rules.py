from pathlib import Path
from typing import Iterable

class PruneRules:
    """
    Directories a deep scan must never descend into.
    """

    # Cache/derivative folders owned by other subsystems (page builders, optimizers)
    EXCLUDED_DIR_NAMES = frozenset({
        "cache", "elementor", "smush", "simple-uploads"
    })

    def __init__(self, excluded: Iterable[str] = EXCLUDED_DIR_NAMES):
        self.excluded = frozenset(excluded)

    def __call__(self, directory: Path) -> bool:
        """
        Returns True if the walker may descend into this directory.
        Matches on the exact directory name, case-sensitive.
        """
        return directory.name not in self.excluded

    def extended(self, *names: str) -> "PruneRules":
        return PruneRules(self.excluded | set(names))
