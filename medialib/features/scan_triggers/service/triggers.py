import logging
from dataclasses import replace
from typing import Callable, List, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from medialib.core.common.enums import ScanMode
from medialib.core.config.settings import settings
from medialib.features.media_scanner.domain.exceptions import ScanAbortedError
from medialib.features.media_scanner.service.orchestrator import ScanOrchestrator
from medialib.features.notices.service.api import NoticeService
from ..domain.interfaces import ITokenSigner
from ..domain.models import (
    Actor, ScanLink, TriggerOutcome,
    UPLOAD_CAPABILITY, SCAN_PARAM, TOKEN_PARAM, TOKEN_ACTION,
    LABEL_AUTO, LABEL_MANUAL, LABEL_MANUAL_DEEP
)

logger = logging.getLogger(__name__)


def strip_scan_params(url: str) -> str:
    """Removes the manual-trigger parameters so reloading the page does not rescan."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
             if k not in (SCAN_PARAM, TOKEN_PARAM)]
    return urlunsplit(parts._replace(query=urlencode(query)))


def _with_params(url: str, **params: str) -> str:
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True) + list(params.items())
    return urlunsplit(parts._replace(query=urlencode(query)))


class ScanTriggerService:
    """
    The two ways a scan gets started: a view load (automatic, narrow)
    and an explicit link carrying a mode and an anti-replay token.
    """

    def __init__(self,
                 orchestrator: ScanOrchestrator,
                 notices: NoticeService,
                 tokens: ITokenSigner,
                 auto_scan_enabled: Optional[Callable[[Actor], bool]] = None):
        self.orchestrator = orchestrator
        self.notices = notices
        self.tokens = tokens
        # Hosting code may override per actor; default comes from Settings
        self.auto_scan_enabled = auto_scan_enabled or (lambda actor: settings.AUTO_SCAN_ENABLED)

    def handle_view_load(self, actor: Actor, params: Mapping[str, str]) -> Optional[TriggerOutcome]:
        """
        Runs a narrow scan when the catalog view loads.
        Skipped when the same request carries a manual trigger.
        """
        if not actor.can(UPLOAD_CAPABILITY):
            return None
        if SCAN_PARAM in params:
            return None
        if not self.auto_scan_enabled(actor):
            logger.debug(f"Auto-scan disabled for actor {actor.id}")
            return None

        return self._run_and_notify(actor, ScanMode.NARROW, LABEL_AUTO)

    def handle_manual_scan(self, actor: Actor, params: Mapping[str, str], page_url: str) -> Optional[TriggerOutcome]:
        """
        Runs the scan requested by a scan link.
        The outcome's redirect_to is page_url without the trigger parameters.
        """
        if not actor.can(UPLOAD_CAPABILITY):
            return None
        if SCAN_PARAM not in params:
            return None
        if not self.tokens.verify(params.get(TOKEN_PARAM, ""), actor.id, TOKEN_ACTION):
            logger.warning(f"Rejected manual scan for actor {actor.id}: invalid or expired token")
            return None

        if params[SCAN_PARAM].strip() == ScanMode.DEEP.value:
            outcome = self._run_and_notify(actor, ScanMode.DEEP, LABEL_MANUAL_DEEP)
        else:
            outcome = self._run_and_notify(actor, ScanMode.NARROW, LABEL_MANUAL)

        return replace(outcome, redirect_to=strip_scan_params(page_url))

    def pop_notice_message(self, actor: Actor) -> Optional[str]:
        return self.notices.pop_message(actor.id)

    def build_scan_links(self, actor: Actor, page_url: str) -> List[ScanLink]:
        """
        The "Scan Missing Images" link and its "Deep Scan" child, for actors allowed to upload.
        """
        if not actor.can(UPLOAD_CAPABILITY):
            return []

        token = self.tokens.create(actor.id, TOKEN_ACTION)
        return [
            ScanLink(
                id="media-scan",
                title="Scan Missing Images",
                href=_with_params(page_url, **{SCAN_PARAM: "1", TOKEN_PARAM: token}),
                tooltip="Scan current month for unregistered images"
            ),
            ScanLink(
                id="media-scan-deep",
                title="Deep Scan (all uploads)",
                href=_with_params(page_url, **{SCAN_PARAM: ScanMode.DEEP.value, TOKEN_PARAM: token}),
                tooltip="Recursively scan all subfolders in uploads",
                parent="media-scan"
            ),
        ]

    def _run_and_notify(self, actor: Actor, mode: ScanMode, label: str) -> TriggerOutcome:
        aborted = False
        try:
            stats = self.orchestrator.run(mode)
        except ScanAbortedError as e:
            # Partial results are still worth reporting
            logger.error(f"{label} aborted for actor {actor.id}: {e}")
            stats = e.partial_stats
            aborted = True

        self.notices.store_notice(actor.id, label, stats)
        return TriggerOutcome(mode=mode, label=label, stats=stats, aborted=aborted)
