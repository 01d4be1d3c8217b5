from dataclasses import dataclass

from medialib.features.media_scanner.domain.models import ScanStats

@dataclass(frozen=True)
class ScanNotice:
    """
    One-time scan summary waiting to be shown to the actor who started the scan.
    """
    label: str
    stats: ScanStats

    def message(self) -> str:
        s = self.stats
        return (
            f"{self.label}: scanned {s.scanned} file(s), imported {s.imported}, "
            f"skipped-existing {s.skipped_existing}, skipped-intermediate {s.skipped_intermediate}, "
            f"errors {s.errors}."
        )
