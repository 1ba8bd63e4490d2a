"""
Services scored from a nested URL scan.

The URL scan runs first; its envelope is wrapped in a ScannedSite and the
kind's own probes read from it.
"""
import logging

from ..domain.kinds import Kind
from ..domain.subjects import ScoreRequest
from ..probes.site import ScannedSite
from .base import ScoringService, subject_metadata
from .url import UrlScanner

logger = logging.getLogger(__name__)


class SiteScanService(ScoringService):

    def __init__(self, ctx=None, scheduler=None, url_scanner=None):
        super().__init__(ctx, scheduler)
        self.url_scanner = url_scanner or UrlScanner(self.ctx, self.scheduler)

    async def score_request(self, request):
        scan = await self.url_scanner.score_request(ScoreRequest(Kind.URL, request.subject))
        logger.debug(f"{self.kind.value} base URL scan of {request.subject.host}: {scan.score}")
        site = ScannedSite(url=request.subject, scan=scan)
        return await super().score_request(ScoreRequest(self.kind, site))

    def metadata(self, subject):
        meta = subject_metadata(subject.url)
        meta.update(url_score=subject.scan.score, url_verdict=subject.scan.verdict.value)
        return meta
