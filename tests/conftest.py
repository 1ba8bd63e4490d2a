"""
Pytest fixtures for VerifyIQ tests.

Fakes for the network collaborators:
- FakeDns            (DnsClient compatible)
- FakeCertificates   (CertificateFetcher compatible)
- httpx.MockTransport behind a real JsonHttpClient
- SlowProbe / ExplodingProbe for scheduler behaviour
- StaticUrlScanner   (fixed URL scan for site-derived services)
"""
import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Optional

import httpx
import pytest

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from verifyiq.config import ScanConfig
from verifyiq.domain.envelope import ResultEnvelope
from verifyiq.domain.kinds import Kind, ProbeId
from verifyiq.domain.outcome import ProbeOutcome
from verifyiq.domain.verdict import classify
from verifyiq.infrastructure import CertificateInfo, JsonHttpClient
from verifyiq.probes.base import Probe
from verifyiq.probes.context import ScanContext

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

# Keys off: every provider-backed probe uses its heuristic unless a test sets one
NO_KEYS_CONFIG = ScanConfig(whois_api_key="", safe_browsing_key="", ipqs_key="")


# =============================================================================
# FAKE COLLABORATORS
# =============================================================================

class FakeDns:
    """
    DnsClient stand-in.

    records: {(name, rdtype): [values] | Exception}. Unlisted lookups answer [].
    """

    def __init__(self, records: Optional[Dict] = None):
        self.records = records or {}
        self.queries = []

    async def resolve(self, name: str, rdtype: str):
        self.queries.append((name, rdtype))
        value = self.records.get((name, rdtype), [])
        if isinstance(value, Exception):
            raise value
        return list(value)


class FakeCertificates:
    def __init__(self, result=None):
        self.result = result
        self.hosts = []

    async def fetch(self, host: str):
        self.hosts.append(host)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def valid_certificate(days_left: int = 200, issuer: str = "Let's Encrypt") -> CertificateInfo:
    return CertificateInfo(
        verified=True,
        not_before=NOW - timedelta(days=30),
        not_after=NOW + timedelta(days=days_left),
        issuer=issuer,
        subject="example.com",
    )


def mock_http(handler=None) -> JsonHttpClient:
    """JsonHttpClient over httpx.MockTransport. Default handler answers 404."""
    def not_found(request):
        return httpx.Response(404, json={"error": "not found"})
    return JsonHttpClient(timeout=5, transport=httpx.MockTransport(handler or not_found))


def make_context(dns=None, certificates=None, http=None, config: ScanConfig = NO_KEYS_CONFIG,
                 now: datetime = NOW) -> ScanContext:
    return ScanContext(
        config=config,
        dns=dns or FakeDns(),
        http=http or mock_http(),
        certificates=certificates or FakeCertificates(valid_certificate()),
        clock=lambda: now,
    )


def healthy_dns(host: str = "example.com") -> FakeDns:
    """A well configured, long-lived domain."""
    return FakeDns({
        (host, "A"): ["93.184.216.34"],
        (host, "MX"): ["10 mail.example.com"],
        (host, "NS"): ["ns1.cloudflare.com", "ns2.cloudflare.com"],
        (host, "TXT"): ["v=spf1 include:_spf.example.com ~all"],
        (f"_dmarc.{host}", "TXT"): ["v=DMARC1; p=reject"],
    })


# =============================================================================
# PROBES FOR SCHEDULER TESTS
# =============================================================================

class StaticProbe(Probe):
    def __init__(self, probe_id: ProbeId, credit: float = 1.0, timeout: Optional[float] = None):
        self.probe_id = probe_id
        self.credit = credit
        self.timeout = timeout
        self.calls = 0

    async def probe(self, subject):
        self.calls += 1
        return self.ok(self.credit, f"static {self.credit}")


class SlowProbe(Probe):
    def __init__(self, probe_id: ProbeId, delay: float, timeout: Optional[float] = None):
        self.probe_id = probe_id
        self.delay = delay
        self.timeout = timeout

    async def probe(self, subject):
        await asyncio.sleep(self.delay)
        return self.ok(1.0, "finished")


class ExplodingProbe(Probe):
    def __init__(self, probe_id: ProbeId, error: Exception):
        self.probe_id = probe_id
        self.error = error

    async def probe(self, subject):
        raise self.error


class StaticUrlScanner:
    """UrlScanner stand-in answering one fixed envelope."""

    def __init__(self, score: int, outcomes=()):
        self.envelope = ResultEnvelope(kind=Kind.URL, score=score, verdict=classify(score, Kind.URL),
                                       outcomes=tuple(outcomes))
        self.requests = []

    async def score_request(self, request):
        self.requests.append(request)
        return self.envelope


def ok(probe_id: ProbeId, credit: float) -> ProbeOutcome:
    return ProbeOutcome.ok(probe_id, credit, "test")


def failed(probe_id: ProbeId, reason: str = "unavailable") -> ProbeOutcome:
    return ProbeOutcome.failed(probe_id, reason)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_dns():
    return healthy_dns()


@pytest.fixture
def context(fake_dns):
    return make_context(dns=fake_dns)
