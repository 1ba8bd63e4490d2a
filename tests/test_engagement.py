"""
Tests for the engagement audit.
"""
import asyncio

import pytest

from conftest import StaticUrlScanner, healthy_dns, make_context
from verifyiq.analyzers.engagement import EngagementAuditor, engagement_rate
from verifyiq.domain.kinds import ProbeId
from verifyiq.domain.subjects import parse_url
from verifyiq.domain.verdict import EngagementVerdict
from verifyiq.probes.site import ScannedSite, bot_percentage, detect_platform, growth_pattern


def audit(url, ctx=None, url_scanner=None):
    return asyncio.run(EngagementAuditor(ctx or make_context(), url_scanner=url_scanner).score({"url": url}))


class TestHelpers:
    @pytest.mark.parametrize("host,platform", [
        ("instagram.com", "instagram"),
        ("www.tiktok.com", "tiktok"),
        ("x.com", "twitter"),
        ("m.youtube.com", "youtube"),
        ("www.linkedin.com", "linkedin"),
        ("notinstagram.com", "unknown"),
        ("example.com", "unknown"),
    ])
    def test_detect_platform(self, host, platform):
        assert detect_platform(host) == platform

    @pytest.mark.parametrize("bots,pattern", [(10, "organic"), (30, "organic"), (31, "inconsistent"),
                                              (50, "inconsistent"), (51, "suspicious")])
    def test_growth_pattern(self, bots, pattern):
        assert growth_pattern(bots) == pattern

    def test_engagement_rate(self):
        assert engagement_rate(0) == 6.0
        assert engagement_rate(20) == 5.0
        assert engagement_rate(200) == 0.5


class TestEngagementAuditor:
    def test_trusted_profile_is_authentic(self):
        envelope = audit("instagram.com/someone", make_context(dns=healthy_dns("instagram.com")))
        # URL 89 -> 11% bots: 62.3 + 15 + 15
        assert envelope.score == 92
        assert envelope.verdict is EngagementVerdict.AUTHENTIC
        assert envelope.details["platform"] == "instagram"
        metrics = envelope.details["metrics"]
        assert metrics["bot_percentage"] == 11
        assert metrics["growth_pattern"] == "organic"
        assert metrics["engagement_rate"] is not None

    def test_untrusted_profile_is_inflated(self):
        envelope = audit("https://tiktok.com/@guru", url_scanner=StaticUrlScanner(20))
        # 80% bots: 14 + 0 + 15
        assert envelope.score == 29
        assert envelope.verdict is EngagementVerdict.INFLATED
        assert envelope.details["metrics"]["growth_pattern"] == "suspicious"

    def test_bot_estimate_clamped(self):
        envelope = audit("https://tiktok.com/@guru", url_scanner=StaticUrlScanner(0))
        assert envelope.details["metrics"]["bot_percentage"] == 85
        envelope = audit("https://tiktok.com/@guru", url_scanner=StaticUrlScanner(100))
        assert envelope.details["metrics"]["bot_percentage"] == 5

    def test_unknown_platform_is_mixed(self):
        envelope = audit("example.com", make_context(dns=healthy_dns()))
        # 50% bots assumed: 35 + 9 + 0
        assert envelope.score == 44
        assert envelope.verdict is EngagementVerdict.MIXED
        assert envelope.details["metrics"]["engagement_rate"] is None
        platform = next(o for o in envelope.outcomes if o.probe_id is ProbeId.PLATFORM)
        assert platform.credit == 0.0

    def test_same_profile_audits_the_same(self):
        first = audit("https://tiktok.com/@guru", url_scanner=StaticUrlScanner(64))
        second = audit("https://tiktok.com/@guru", url_scanner=StaticUrlScanner(64))
        assert first.score == second.score
        assert dict(first.details) == dict(second.details)

    def test_bot_percentage_needs_no_url_checks(self):
        site = ScannedSite(url=parse_url("https://example.com"), scan=StaticUrlScanner(90).envelope)
        assert bot_percentage(site) == 50
