"""
Tests for the dark web exposure scan.
"""
import asyncio

from conftest import FakeDns, healthy_dns, make_context
from verifyiq.analyzers.darkweb import DarkWebScanner
from verifyiq.domain.envelope import ResultEnvelope
from verifyiq.domain.errors import ProbeError
from verifyiq.domain.kinds import Kind, ProbeId
from verifyiq.domain.outcome import ProbeOutcome, ProbeStatus
from verifyiq.domain.subjects import parse_url
from verifyiq.domain.verdict import DarkWebVerdict, UrlVerdict
from verifyiq.probes.darkweb import (
    MarketplaceMatchProbe,
    PhishingPatternProbe,
    ThreatCrossReferenceProbe,
    TldRiskProbe,
    bare_domain,
)


def run(probe, url):
    return asyncio.run(probe.run(parse_url(url, assume_https=True)))


class StubUrlScanner:
    def __init__(self, envelope=None, error=None):
        self.envelope = envelope
        self.error = error
        self.urls = []

    async def score_url(self, url):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.envelope


class TestNameProbes:
    def test_bare_domain(self):
        assert bare_domain(parse_url("https://www.example.com")) == "example.com"

    def test_marketplace(self):
        outcome = run(MarketplaceMatchProbe(), "alphabay-mirror.com")
        assert outcome.credit == 0.0
        assert outcome.detail["market"] == "alphabay"
        assert outcome.detail["finding"]["title"] == "Dark Web Marketplace Association"

    def test_marketplace_clean(self):
        assert run(MarketplaceMatchProbe(), "example.com").credit == 1.0

    def test_tld_risk(self):
        assert run(TldRiskProbe(), "cheap-deals.pw").credit == 0.0
        assert run(TldRiskProbe(), "example.com").credit == 1.0

    def test_phishing_pattern(self):
        outcome = run(PhishingPatternProbe(), "metamask-wallet-sync.com")
        assert outcome.credit == 0.0
        assert outcome.detail["pattern"] == "metamask-"


class TestThreatCrossReference:
    def test_credit_from_url_score(self):
        nested = ResultEnvelope(
            kind=Kind.URL, score=30, verdict=UrlVerdict.DANGEROUS,
            outcomes=(
                ProbeOutcome.ok(ProbeId.DOMAIN_AGE, 0.1, "young", {"age_days": 4}),
                ProbeOutcome.ok(ProbeId.TLS_CERTIFICATE, 0.0, "Site does not use HTTPS"),
                ProbeOutcome.ok(ProbeId.THREAT_LIST, 0.0, "listed", {"threats": ["MALWARE"], "source": "pattern_heuristic"}),
            ),
        )
        scanner = StubUrlScanner(nested)
        outcome = run(ThreatCrossReferenceProbe(scanner.score_url, timeout=5), "bad.example")
        assert scanner.urls == ["https://bad.example"]
        assert outcome.credit == 0.3
        assert outcome.detail["url_verdict"] == "dangerous"
        titles = [f["title"] for f in outcome.detail["findings"]]
        assert titles == ["Extremely New Domain", "Missing/Invalid SSL Certificate", "Flagged by Threat Lists"]

    def test_rejected_nested_scan_is_failed(self):
        scanner = StubUrlScanner(ResultEnvelope.structural_error(Kind.URL, "Invalid URL format: x"))
        outcome = run(ThreatCrossReferenceProbe(scanner.score_url, timeout=5), "example.com")
        assert outcome.status is ProbeStatus.FAILED


class TestDarkWebScanner:
    def test_scam_market_mirror(self):
        ctx = make_context(dns=FakeDns())
        envelope = asyncio.run(DarkWebScanner(ctx).score({"url": "silkroad-market.xyz"}))
        # market 0, tld 0, pattern 20, cross reference 62/100 * 30
        assert envelope.score == 39
        assert envelope.verdict is DarkWebVerdict.HIGH
        details = envelope.details
        assert details["domain"] == "silkroad-market.xyz"
        assert details["found_on_darkweb"] is True
        assert details["total_findings"] == 2
        assert details["risk_level"] == "medium"
        assert details["scan_data"] == {"score": 62, "verdict": "suspicious"}

    def test_onion_mirror_is_informational(self):
        ctx = make_context(dns=healthy_dns("duckduckgo.com"))
        envelope = asyncio.run(DarkWebScanner(ctx).score({"url": "https://duckduckgo.com"}))
        assert envelope.verdict is DarkWebVerdict.CLEAN
        assert envelope.details["findings"][0]["title"] == "Official .onion Mirror Exists"
        assert envelope.details["risk_level"] == "medium"

    def test_breach_service_finding(self):
        scanner = StubUrlScanner(ResultEnvelope(kind=Kind.URL, score=90, verdict=UrlVerdict.SAFE))
        envelope = asyncio.run(DarkWebScanner(make_context(), url_scanner=scanner).score({"url": "haveibeenpwned.com"}))
        assert [f["title"] for f in envelope.details["findings"]] == ["Data Breach Investigation Service"]

    def test_cross_reference_failure_is_neutral(self):
        scanner = StubUrlScanner(error=ProbeError("nested scan unavailable"))
        envelope = asyncio.run(DarkWebScanner(make_context(), url_scanner=scanner).score({"url": "example.com"}))
        # 35 + 15 + 20 + 30 * 0.5
        assert envelope.score == 85
        assert envelope.details["scan_data"] is None
        assert envelope.details["risk_level"] == "clean"

    def test_missing_url(self):
        envelope = asyncio.run(DarkWebScanner(make_context()).score({}))
        assert envelope.error is not None
        assert envelope.verdict is DarkWebVerdict.HIGH
