"""
Social profile probes (pure, no I/O).
"""
from typing import List

from ..domain.kinds import ProbeId
from ..domain.subjects import SocialProfile
from .base import Probe
from .context import utcnow

# Average month length used for account age
DAYS_PER_MONTH = 30


class FollowerRatioProbe(Probe):
    """
    Followers / following.

    Only meaningful for accounts following more than 1000 others:
        ratio < 0.1 -> 0.0, < 0.5 -> 0.6, else 1.0
    """
    probe_id = ProbeId.FOLLOWER_RATIO

    async def probe(self, subject: SocialProfile):
        if subject.following <= 1000:
            return self.ok(1.0, "Following count in normal range", following=subject.following)
        ratio = subject.followers / subject.following
        detail = dict(ratio=round(ratio, 4), following=subject.following)
        if ratio < 0.1:
            return self.ok(0.0, "Suspicious follower/following ratio", penalty=True, **detail)
        if ratio < 0.5:
            return self.ok(0.6, "Low follower/following ratio", penalty=True, **detail)
        return self.ok(1.0, "Healthy follower/following ratio", **detail)


class EngagementProbe(Probe):
    """
    Average likes as a percentage of followers, for accounts above 10k followers.
    Scheduled only when the profile carries an average like count.
        < 0.05% -> 0.0, < 0.5% -> 0.65, else 1.0
    """
    probe_id = ProbeId.ENGAGEMENT

    async def probe(self, subject: SocialProfile):
        if subject.followers <= 10000:
            return self.ok(1.0, "Audience too small to judge engagement", followers=subject.followers)
        rate = subject.avg_likes / subject.followers * 100
        detail = dict(engagement_rate_pct=round(rate, 4))
        if rate < 0.05:
            return self.ok(0.0, "Critical engagement mismatch (possible bought followers)", penalty=True, **detail)
        if rate < 0.5:
            return self.ok(0.65, "Low engagement for follower count", penalty=True, **detail)
        return self.ok(1.0, "Engagement consistent with audience size", **detail)


class AccountAgeProbe(Probe):
    """Scheduled only when the profile carries a creation date."""
    probe_id = ProbeId.ACCOUNT_AGE

    def __init__(self, clock=utcnow):
        self.clock = clock

    async def probe(self, subject: SocialProfile):
        months = (self.clock() - subject.creation_date).days / DAYS_PER_MONTH
        detail = dict(age_months=round(months, 1))
        if months < 1:
            return self.ok(0.0, "New account (< 1 month)", penalty=True, **detail)
        if months > 12:
            return self.ok(1.0, "Account age > 1 year", bonus=True, **detail)
        return self.ok(0.75, "Account younger than a year", **detail)


class VerificationProbe(Probe):
    probe_id = ProbeId.VERIFICATION

    async def probe(self, subject: SocialProfile):
        if subject.is_verified:
            return self.ok(1.0, "Platform verified", bonus=True)
        return self.ok(0.6, "Not verified")


def build_social_probes(subject: SocialProfile, clock=utcnow) -> List[Probe]:
    probes = [FollowerRatioProbe()]
    if subject.avg_likes is not None:
        probes.append(EngagementProbe())
    if subject.creation_date is not None:
        probes.append(AccountAgeProbe(clock))
    probes.append(VerificationProbe())
    return probes
