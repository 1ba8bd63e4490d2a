"""
Probes over a finished URL scan.

Supplier scoring, engagement audits and the trading shield all start from
one URL scan of the subject and read its checks. A check that produced no
signal makes the reading probe fail, so it scores neutral instead of
counting as a negative.
"""
from dataclasses import dataclass
from typing import List, Mapping, Optional

from ..blocklists import (
    AUDITED_PLATFORMS,
    PLATFORM_HOSTS,
    REGULATED_EXCHANGES,
)
from ..domain.envelope import ResultEnvelope
from ..domain.errors import ProbeError
from ..domain.kinds import ProbeId
from ..domain.subjects import UrlSubject
from .base import Probe


@dataclass(frozen=True)
class ScannedSite:
    """A URL together with the finished URL scan of it."""
    url: UrlSubject
    scan: ResultEnvelope

    @property
    def host(self) -> str:
        host = self.url.host
        return host[4:] if host.startswith("www.") else host

    def check(self, probe_id: ProbeId) -> Mapping:
        """
        Detail of one URL check.

        Raises:
            ProbeError: the check did not produce a signal
        """
        outcome = next((o for o in self.scan.outcomes if o.probe_id is probe_id), None)
        if outcome is None or not outcome.is_ok:
            raise ProbeError(f"URL check {probe_id.value} unavailable")
        return outcome.detail

    def tls_valid(self) -> bool:
        return bool(self.check(ProbeId.TLS_CERTIFICATE).get("valid"))


# =============================================================================
# SHARED HELPERS
# =============================================================================

def _on_domain(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


def detect_platform(host: str) -> str:
    for platform, domains in PLATFORM_HOSTS:
        if any(_on_domain(host, d) for d in domains):
            return platform
    return "unknown"


def regulated_exchange(host: str) -> Optional[str]:
    return next((e for e in REGULATED_EXCHANGES if _on_domain(host, e)), None)


def cloned_exchange(host: str) -> Optional[str]:
    """Exchange whose brand label appears in a host that is not that exchange."""
    if regulated_exchange(host):
        return None
    return next((e for e in REGULATED_EXCHANGES if e.split(".")[0] in host), None)


def bot_percentage(site: ScannedSite) -> int:
    """
    Estimated share of inauthentic audience, 5-85.

    Derived from the trust of the profile URL; 50 when the platform has no
    audience heuristics.
    """
    if detect_platform(site.url.host) not in AUDITED_PLATFORMS:
        return 50
    return max(5, min(85, 100 - site.scan.score))


def growth_pattern(bots: int) -> str:
    if bots > 50:
        return "suspicious"
    if bots > 30:
        return "inconsistent"
    return "organic"


def age_text(age_days: int) -> str:
    return f"{age_days // 365}y {(age_days % 365) // 30}mo old"


# =============================================================================
# SUPPLIER
# =============================================================================

class RegistrationProbe(Probe):
    """Registered domain 0.65, unregistered 0.2."""
    probe_id = ProbeId.REGISTRATION

    async def probe(self, subject: ScannedSite):
        if subject.check(ProbeId.WHOIS).get("registered"):
            return self.ok(0.65, "Domain registration verified")
        return self.ok(0.2, "Could not verify domain registration")


class ReviewsProbe(Probe):
    probe_id = ProbeId.REVIEWS

    async def probe(self, subject: ScannedSite):
        score = subject.check(ProbeId.REPUTATION)["score"]
        return self.ok(score / 100, f"Reputation {score}/100", reputation=score)


class DomainAuthenticityProbe(Probe):
    """
    Points out of 100:
        age > 1 year 40 (else 15), valid TLS 25, DNS records 20, SPF 15
    """
    probe_id = ProbeId.DOMAIN_AUTHENTICITY

    async def probe(self, subject: ScannedSite):
        age_days = subject.check(ProbeId.DOMAIN_AGE)["age_days"]
        dns = subject.check(ProbeId.DNS_RECORDS)
        tls_valid = subject.tls_valid()

        points = 40 if age_days > 365 else 15
        points += 25 if tls_valid else 0
        points += 20 if dns.get("has_records") else 0
        points += 15 if dns.get("has_spf") else 0
        return self.ok(points / 100, f"Domain authenticity {points}/100", points=points)


class ContactProbe(Probe):
    """
    Points out of 100:
        mail server 50 (else 10), known registrar 30, DNS records 20
    """
    probe_id = ProbeId.CONTACT

    async def probe(self, subject: ScannedSite):
        dns = subject.check(ProbeId.DNS_RECORDS)
        whois = subject.check(ProbeId.WHOIS)

        points = 50 if dns.get("mx_count", 0) > 0 else 10
        points += 30 if whois.get("registrar") else 0
        points += 20 if dns.get("has_records") else 0
        points = min(100, points)
        return self.ok(points / 100, f"Contact verification {points}/100", points=points)


def build_supplier_probes() -> List[Probe]:
    return [RegistrationProbe(), ReviewsProbe(), DomainAuthenticityProbe(), ContactProbe()]


# =============================================================================
# ENGAGEMENT AUDIT
# =============================================================================

class PlatformProbe(Probe):
    """Audited platform 1.0, other known platform 0.5, unknown 0.0."""
    probe_id = ProbeId.PLATFORM

    async def probe(self, subject: ScannedSite):
        platform = detect_platform(subject.url.host)
        if platform in AUDITED_PLATFORMS:
            return self.ok(1.0, f"Recognised social platform: {platform}", platform=platform)
        if platform != "unknown":
            return self.ok(0.5, f"No audience heuristics for {platform}", platform=platform)
        return self.ok(0.0, "Not a recognised social platform", platform=platform)


class FollowerQualityProbe(Probe):
    probe_id = ProbeId.FOLLOWER_QUALITY

    async def probe(self, subject: ScannedSite):
        bots = bot_percentage(subject)
        return self.ok((100 - bots) / 100, f"Estimated {bots}% inauthentic audience", bot_percentage=bots)


class GrowthPatternProbe(Probe):
    """organic 1.0, inconsistent 0.6, suspicious 0.0"""
    probe_id = ProbeId.GROWTH_PATTERN

    async def probe(self, subject: ScannedSite):
        pattern = growth_pattern(bot_percentage(subject))
        credit = {"organic": 1.0, "inconsistent": 0.6, "suspicious": 0.0}[pattern]
        return self.ok(credit, f"Growth pattern looks {pattern}", pattern=pattern)


def build_engagement_probes() -> List[Probe]:
    return [PlatformProbe(), FollowerQualityProbe(), GrowthPatternProbe()]


# =============================================================================
# TRADING SHIELD (pass 1.0 / fail 0.0)
# =============================================================================

class SslSecurityProbe(Probe):
    probe_id = ProbeId.SSL_SECURITY

    async def probe(self, subject: ScannedSite):
        if subject.tls_valid():
            issuer = subject.check(ProbeId.TLS_CERTIFICATE).get("issuer") or "unknown issuer"
            return self.ok(1.0, f"Valid SSL from {issuer}")
        return self.ok(0.0, "No valid SSL, never enter credentials")


class DomainMaturityProbe(Probe):
    """Passes above 180 days."""
    probe_id = ProbeId.DOMAIN_MATURITY

    async def probe(self, subject: ScannedSite):
        age_days = subject.check(ProbeId.DOMAIN_AGE)["age_days"]
        return self.ok(1.0 if age_days > 180 else 0.0, age_text(age_days), age_days=age_days)


class ThreatDatabaseProbe(Probe):
    probe_id = ProbeId.THREAT_DATABASE

    async def probe(self, subject: ScannedSite):
        if subject.check(ProbeId.THREAT_LIST).get("safe"):
            return self.ok(1.0, "Not listed in threat databases")
        return self.ok(0.0, "URL flagged as potentially dangerous")


class ExchangeVerificationProbe(Probe):
    probe_id = ProbeId.EXCHANGE_VERIFICATION

    async def probe(self, subject: ScannedSite):
        exchange = regulated_exchange(subject.host)
        if exchange:
            return self.ok(1.0, "Known regulated exchange", exchange=exchange)
        return self.ok(0.0, "Not in verified exchange database, verify independently")


class CloneDetectionProbe(Probe):
    probe_id = ProbeId.CLONE_DETECTION

    async def probe(self, subject: ScannedSite):
        original = cloned_exchange(subject.host)
        if original:
            return self.ok(0.0, f"Domain resembles {original}, possible clone", resembles=original)
        return self.ok(1.0, "No clone patterns detected")


class RegistrationQualityProbe(Probe):
    probe_id = ProbeId.REGISTRATION_QUALITY

    async def probe(self, subject: ScannedSite):
        whois = subject.check(ProbeId.WHOIS)
        registrar = whois.get("registrar")
        if not whois.get("registered"):
            return self.ok(0.0, "Domain registration could not be verified")
        return self.ok(1.0, f"Registrar: {registrar}" if registrar else "Registered, registrar unavailable")


def build_trading_probes() -> List[Probe]:
    return [
        SslSecurityProbe(),
        DomainMaturityProbe(),
        ThreatDatabaseProbe(),
        ExchangeVerificationProbe(),
        CloneDetectionProbe(),
        RegistrationQualityProbe(),
    ]
