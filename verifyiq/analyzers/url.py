"""
URL Scanner.

A threat-list hit caps the score at THREAT_HIT_CAP, however clean the other
signals look.
"""
from ..domain.envelope import ResultEnvelope
from ..domain.kinds import Kind, ProbeId
from ..probes.url import build_url_probes
from .base import ScoringService, outcome_of

THREAT_HIT_CAP = 30


class UrlScanner(ScoringService):
    kind = Kind.URL

    def build_probes(self, subject):
        return build_url_probes(self.ctx)

    def score_cap(self, outcomes):
        threat = outcome_of(outcomes, ProbeId.THREAT_LIST)
        if threat is not None and threat.is_ok and threat.detail.get("safe") is False:
            return THREAT_HIT_CAP
        return None

    def describe(self, subject, score, outcomes):
        checks = {}
        for outcome in outcomes:
            if outcome.is_ok:
                checks[outcome.probe_id.value] = dict(outcome.detail)
            else:
                checks[outcome.probe_id.value] = {"error": outcome.reason}
        return {"domain": subject.host, "checks": checks}

    async def score_url(self, url: str) -> ResultEnvelope:
        return await self.score({"url": url})
