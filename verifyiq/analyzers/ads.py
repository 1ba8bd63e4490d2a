"""
Ad transparency checker.

The score is transparency; ad likelihood is reported as 100 - score, capped
at LIKELIHOOD_CAP.
"""
from urllib.parse import quote

from ..blocklists import META_PLATFORMS
from ..domain.kinds import Kind, ProbeId
from ..probes.ads import build_ad_probes
from .base import ScoringService, outcome_of

# Reported ad likelihood never claims certainty
LIKELIHOOD_CAP = 95

AD_LIBRARY_URLS = {
    "meta": "https://www.facebook.com/ads/library/?active_status=active&ad_type=all&country=ALL&q={name}",
    "tiktok": "https://library.tiktok.com/ads?region=all&keyword={name}",
    "google": "https://adstransparency.google.com/?search={name}",
}


def ad_library_urls(username: str) -> dict:
    name = quote(username, safe="")
    return {platform: template.format(name=name) for platform, template in AD_LIBRARY_URLS.items()}


def likelihood_summary(likelihood: int) -> str:
    if likelihood >= 70:
        return "Very likely spending money on ads to target you"
    if likelihood >= 40:
        return "Shows signs of active ad spending"
    if likelihood >= 20:
        return "Some promotional indicators detected"
    return "No strong ad indicators detected"


class AdTransparencyChecker(ScoringService):
    kind = Kind.AD_TRANSPARENCY

    def build_probes(self, subject):
        return build_ad_probes()

    def describe(self, subject, score, outcomes):
        likelihood = min(LIKELIHOOD_CAP, 100 - score)
        is_running_ads = likelihood >= 40

        funnel = outcome_of(outcomes, ProbeId.FUNNEL_BIO)
        indicators = list(funnel.detail.get("indicators", ())) if funnel is not None and funnel.is_ok else []

        platforms = []
        if subject.platform in META_PLATFORMS:
            platforms.append("Meta (Facebook/Instagram)")
        elif subject.platform == "tiktok":
            platforms.append("TikTok")
        elif subject.platform == "youtube":
            platforms.append("Google/YouTube")
        if not platforms and is_running_ads:
            platforms.append("Meta (Facebook/Instagram)")

        return {
            "ad_likelihood": likelihood,
            "is_running_ads": is_running_ads,
            "ad_count": max(1, round(likelihood / 15)) if is_running_ads else 0,
            "ad_platforms": platforms,
            "funnel_indicators": indicators,
            "summary": likelihood_summary(likelihood),
            "manual_check_urls": ad_library_urls(subject.username),
        }
