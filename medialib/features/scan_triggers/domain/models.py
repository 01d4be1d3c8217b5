from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from medialib.core.common.enums import ScanMode
from medialib.features.media_scanner.domain.models import ScanStats

UPLOAD_CAPABILITY = "upload_files"

# Query parameters of the manual trigger link
SCAN_PARAM = "scan"
TOKEN_PARAM = "_token"
TOKEN_ACTION = "scan_now"

LABEL_AUTO = "Auto-scan (current month)"
LABEL_MANUAL = "Manual Scan (current month)"
LABEL_MANUAL_DEEP = "Manual Deep Scan (all uploads)"


@dataclass(frozen=True)
class Actor:
    """
    Whoever caused the request, as the hosting application knows them.
    """
    id: str
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


@dataclass(frozen=True)
class TriggerOutcome:
    mode: ScanMode
    label: str
    stats: ScanStats
    # Set for manual triggers: where to send the browser so a reload won't rescan
    redirect_to: Optional[str] = None
    aborted: bool = False


@dataclass(frozen=True)
class ScanLink:
    id: str
    title: str
    href: str
    tooltip: str = ""
    parent: Optional[str] = None
