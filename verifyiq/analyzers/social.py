"""
Social profile authenticity.
"""
from ..domain.kinds import Kind
from ..probes.social import build_social_probes
from .base import ScoringService


class SocialAuthenticityAnalyzer(ScoringService):
    kind = Kind.SOCIAL

    def build_probes(self, subject):
        return build_social_probes(subject, clock=self.ctx.clock)

    def describe(self, subject, score, outcomes):
        penalties, bonuses = [], []
        for outcome in outcomes:
            if not outcome.is_ok:
                continue
            if outcome.detail.get("penalty"):
                penalties.append({"reason": outcome.explanation, "probe": outcome.probe_id.value})
            elif outcome.detail.get("bonus"):
                bonuses.append({"reason": outcome.explanation, "probe": outcome.probe_id.value})
        return {"penalties": penalties, "bonuses": bonuses}
