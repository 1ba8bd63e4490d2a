"""
Ad transparency probes (pure).

Credits measure transparency: 1.0 = no sign of paid promotion.
"""
from typing import List

from ..blocklists import FUNNEL_PATTERNS, GURU_CATEGORIES, META_PLATFORMS
from ..domain.kinds import ProbeId
from ..domain.subjects import AdvertiserProfile
from .base import Probe


def funnel_indicators(bio: str) -> List[str]:
    if not bio:
        return []
    return [flag for pattern, flag in FUNNEL_PATTERNS if pattern.search(bio)]


def guru_categories(bio: str) -> List[str]:
    lowered = (bio or "").lower()
    return [category for category in GURU_CATEGORIES if category in lowered]


class FunnelBioProbe(Probe):
    """
    Sales-funnel language in the bio.
        0 -> 1.0, 1-2 -> 0.75, 3-4 -> 0.375, 5+ -> 0.0
    """
    probe_id = ProbeId.FUNNEL_BIO

    async def probe(self, subject: AdvertiserProfile):
        found = funnel_indicators(subject.bio)
        count = len(found)
        if count >= 5:
            return self.ok(0.0, f"Heavy funnel bio: {count} indicators", indicators=found)
        if count >= 3:
            return self.ok(0.375, f"Moderate funnel bio: {count} indicators", indicators=found)
        if count >= 1:
            return self.ok(0.75, f"Some funnel signals: {count}", indicators=found)
        return self.ok(1.0, "No funnel language in bio", indicators=[])


class GuruFollowerRangeProbe(Probe):
    """10k-500k followers plus funnel language is the typical paid-growth profile."""
    probe_id = ProbeId.GURU_FOLLOWER_RANGE

    async def probe(self, subject: AdvertiserProfile):
        in_range = 10000 < subject.followers < 500000
        if in_range and funnel_indicators(subject.bio):
            return self.ok(0.0, "Follower count in typical guru/influencer ad range", followers=subject.followers)
        return self.ok(1.0, "Follower count outside guru ad profile", followers=subject.followers)


class AdPlatformProbe(Probe):
    probe_id = ProbeId.AD_PLATFORM

    async def probe(self, subject: AdvertiserProfile):
        if subject.platform in META_PLATFORMS:
            return self.ok(0.0, "Meta platform: ad library coverage is highest here", platform=subject.platform)
        return self.ok(1.0, f"Platform: {subject.platform}", platform=subject.platform)


class GuruCategoryProbe(Probe):
    """Each matched guru niche costs 0.2 credit."""
    probe_id = ProbeId.GURU_CATEGORY

    async def probe(self, subject: AdvertiserProfile):
        matched = guru_categories(subject.bio)
        if not matched:
            return self.ok(1.0, "No guru niche keywords", categories=[])
        credit = max(0.0, 1 - 0.2 * len(matched))
        return self.ok(round(credit, 4), f"Guru niches: {', '.join(matched)}", categories=matched)


def build_ad_probes() -> List[Probe]:
    return [FunnelBioProbe(), GuruFollowerRangeProbe(), AdPlatformProbe(), GuruCategoryProbe()]
