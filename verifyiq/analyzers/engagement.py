"""
Engagement audit of a social profile URL.

The inauthentic-audience estimate follows the trust of the profile URL, so
the same profile always audits the same way.
"""
from ..blocklists import AUDITED_PLATFORMS
from ..domain.kinds import Kind
from ..probes.site import bot_percentage, build_engagement_probes, detect_platform, growth_pattern
from .site import SiteScanService


def engagement_rate(bots: int) -> float:
    return round(max(0.5, 6 - bots / 20), 1)


class EngagementAuditor(SiteScanService):
    kind = Kind.ENGAGEMENT_AUDIT

    def build_probes(self, subject):
        return build_engagement_probes()

    def describe(self, subject, score, outcomes):
        platform = detect_platform(subject.url.host)
        bots = bot_percentage(subject)
        return {
            "platform": platform,
            "url_score": subject.scan.score,
            "metrics": {
                "bot_percentage": bots,
                "engagement_rate": engagement_rate(bots) if platform in AUDITED_PLATFORMS else None,
                "growth_pattern": growth_pattern(bots),
            },
        }
