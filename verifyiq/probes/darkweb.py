"""
Dark web exposure probes.

Three name-based checks on the domain plus a cross reference that runs a
full URL scan and feeds its score back as credit.
"""
from typing import Awaitable, Callable, List

from ..blocklists import DARKWEB_PHISHING_PATTERNS, DARKWEB_SUSPICIOUS_TLDS, SCAM_MARKETS
from ..domain.errors import ProbeError
from ..domain.kinds import ProbeId
from ..domain.subjects import UrlSubject
from .base import Probe


def bare_domain(subject: UrlSubject) -> str:
    host = subject.host
    return host[4:] if host.startswith("www.") else host


class MarketplaceMatchProbe(Probe):
    probe_id = ProbeId.MARKETPLACE_MATCH

    async def probe(self, subject: UrlSubject):
        domain = bare_domain(subject)
        market = next((m for m in SCAM_MARKETS if m in domain), None)
        if market:
            return self.ok(0.0, "Domain matches a known dark web marketplace name", market=market,
                           finding={"title": "Dark Web Marketplace Association",
                                    "detail": "Clear web mirrors of dark web markets are often phishing scams.",
                                    "source": "Dark Web Market Database"})
        return self.ok(1.0, "No marketplace match detected")


class TldRiskProbe(Probe):
    probe_id = ProbeId.TLD_RISK

    async def probe(self, subject: UrlSubject):
        tld = next((t for t in DARKWEB_SUSPICIOUS_TLDS if subject.host.endswith(t)), None)
        if tld:
            return self.ok(0.0, f"High-risk TLD {tld}", tld=tld,
                           finding={"title": "High-Risk TLD Detected",
                                    "detail": "This extension is common for disposable sites and phishing pages.",
                                    "source": "TLD Threat Intelligence"})
        return self.ok(1.0, "TLD is not in high-risk category")


class PhishingPatternProbe(Probe):
    probe_id = ProbeId.PHISHING_PATTERN

    async def probe(self, subject: UrlSubject):
        domain = bare_domain(subject)
        pattern = next((p for p in DARKWEB_PHISHING_PATTERNS if p in domain), None)
        if pattern:
            return self.ok(0.0, f"Domain contains phishing pattern \"{pattern}\"", pattern=pattern,
                           finding={"title": "Phishing Pattern Match",
                                    "detail": f"\"{pattern}\" is frequent in phishing campaigns.",
                                    "source": "Phishing Intel Database"})
        return self.ok(1.0, "No known phishing patterns detected")


class ThreatCrossReferenceProbe(Probe):
    """
    Nested URL scan.

    credit = URL score / 100. New domains, invalid TLS and threat-list hits
    found by the nested scan are surfaced as findings.
    """
    probe_id = ProbeId.THREAT_CROSS_REFERENCE

    def __init__(self, scan_url: Callable[[str], Awaitable], timeout: float):
        self.scan_url = scan_url
        self.timeout = timeout

    async def probe(self, subject: UrlSubject):
        envelope = await self.scan_url(subject.url)
        if envelope.error:
            raise ProbeError(f"cross-reference scan rejected URL: {envelope.error}")

        checks = {o.probe_id: o for o in envelope.outcomes}
        findings = []

        age = checks.get(ProbeId.DOMAIN_AGE)
        if age is not None and age.is_ok and age.detail.get("age_days", 0) < 30:
            findings.append({"title": "Extremely New Domain",
                             "detail": f"Domain is only {age.detail['age_days']} days old.",
                             "source": "WHOIS Intelligence"})
        tls = checks.get(ProbeId.TLS_CERTIFICATE)
        if tls is not None and tls.is_ok and tls.credit == 0.0:
            findings.append({"title": "Missing/Invalid SSL Certificate",
                             "detail": tls.explanation,
                             "source": "SSL Certificate Check"})
        threat = checks.get(ProbeId.THREAT_LIST)
        if threat is not None and threat.is_ok and threat.credit == 0.0:
            findings.append({"title": "Flagged by Threat Lists",
                             "detail": ", ".join(threat.detail.get("threats", ())) or "Known threats",
                             "source": threat.detail.get("source", "threat_list")})

        verdict = envelope.verdict.value
        explanation = ("No additional threats found in cross-reference" if verdict == "safe"
                       else f"Cross-reference flagged: {verdict}")
        return self.ok(envelope.score / 100, explanation, url_score=envelope.score,
                       url_verdict=verdict, findings=findings)


def build_darkweb_probes(scan_url, cross_reference_timeout: float) -> List[Probe]:
    return [
        MarketplaceMatchProbe(),
        TldRiskProbe(),
        PhishingPatternProbe(),
        ThreatCrossReferenceProbe(scan_url, cross_reference_timeout),
    ]
