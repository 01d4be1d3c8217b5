from medialib.features.media_scanner.service.api import media_scanner
from medialib.features.notices.service.api import notices
from ..data.tokens import HmacTokenSigner
from .triggers import ScanTriggerService

# Singleton Instance for easy import
scan_triggers = ScanTriggerService(
    orchestrator=media_scanner.orchestrator,
    notices=notices,
    tokens=HmacTokenSigner()
)
