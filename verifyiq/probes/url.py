"""
URL probes.

Six independent signals about a website. Provider-backed signals
(WHOIS, Safe Browsing, IPQualityScore) fall back to a local heuristic when
the API key is missing or the provider call fails.
"""
import asyncio
import logging
import re
from datetime import datetime
from typing import List, Optional, Tuple
from urllib.parse import quote

from ..blocklists import (
    MANAGED_DNS_AGE_DAYS,
    MANAGED_DNS_PROVIDERS,
    PHISHING_PATTERNS,
    SUSPICIOUS_TLDS,
    TRUSTED_TLDS,
    UNMANAGED_DNS_AGE_DAYS,
)
from ..config import SAFE_BROWSING_CLIENT_ID, SAFE_BROWSING_CLIENT_VERSION
from ..domain.errors import DnsLookupError, ProbeError, StructuralError
from ..domain.kinds import ProbeId
from ..domain.outcome import ProbeOutcome
from ..domain.subjects import UrlSubject, parse_timestamp
from .base import Probe
from .context import ScanContext
from .fallback import Assessment, FallbackProbe, Strategy

logger = logging.getLogger(__name__)

SAFE_BROWSING_THREAT_TYPES = [
    'MALWARE', 'SOCIAL_ENGINEERING', 'UNWANTED_SOFTWARE', 'POTENTIALLY_HARMFUL_APPLICATION',
]


# =============================================================================
# SHARED HELPERS
# =============================================================================

def age_credit(age_days: int) -> float:
    """
    Domain age -> credit.

    >= 2 years 1.0, >= 1 year 0.8, >= 180 days 0.6, >= 30 days 0.3, else 0.1
    """
    if age_days >= 730:
        return 1.0
    if age_days >= 365:
        return 0.8
    if age_days >= 180:
        return 0.6
    if age_days >= 30:
        return 0.3
    return 0.1


def matches_phishing_pattern(text: str) -> bool:
    return any(pattern.search(text) for pattern in PHISHING_PATTERNS)


def heuristic_reputation(subject: UrlSubject) -> Tuple[int, List[str]]:
    """
    Offline reputation estimate 0-100 from the shape of the domain.

    Returns:
        (score, factors that moved it)
    """
    score = 70
    factors = []

    if subject.tld in TRUSTED_TLDS:
        score += 10
        factors.append(f"trusted TLD {subject.tld}")
    if subject.tld in SUSPICIOUS_TLDS:
        score -= 25
        factors.append(f"high-risk TLD {subject.tld}")

    if len(subject.root_domain) > 30:
        score -= 10
        factors.append("very long domain")
    elif len(subject.root_domain) < 6:
        score += 5
        factors.append("short domain")

    if len(subject.host.split("-")) > 3:
        score -= 15
        factors.append("many hyphens")
    if re.search(r"\d{4,}", subject.host):
        score -= 10
        factors.append("long digit run")
    if subject.subdomain_count > 2:
        score -= 10
        factors.append("deep subdomain nesting")
    if matches_phishing_pattern(subject.host):
        score -= 30
        factors.append("brand-impersonation pattern")

    return max(0, min(100, score)), factors


def _provider_date(value) -> datetime:
    try:
        return parse_timestamp(value)
    except StructuralError as e:
        raise ProbeError(f"provider returned unparseable date {value!r}") from e


async def fetch_whois_record(ctx: ScanContext, domain: str) -> dict:
    """WhoisXML API record for a registrable domain."""
    data = await ctx.http.get_json(ctx.config.whois_api_url, params={
        "apiKey": ctx.config.whois_api_key,
        "domainName": domain,
        "outputFormat": "JSON",
    })
    record = data.get("WhoisRecord") if isinstance(data, dict) else None
    if not isinstance(record, dict):
        raise ProbeError("WHOIS response has no WhoisRecord")
    return record


def record_text(record: dict, name: str) -> Optional[str]:
    """String field of a WHOIS record; any other JSON type is a malformed record."""
    value = record.get(name)
    if value is not None and not isinstance(value, str):
        raise ProbeError(f"WHOIS field {name} is {type(value).__name__}, expected a string")
    return value


def record_section(record: dict, name: str) -> dict:
    value = record.get(name) or {}
    if not isinstance(value, dict):
        raise ProbeError(f"WHOIS section {name} is {type(value).__name__}, expected an object")
    return value


# =============================================================================
# DOMAIN AGE
# =============================================================================

class DomainAgeProbe(FallbackProbe):
    probe_id = ProbeId.DOMAIN_AGE

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    def strategies(self):
        return (
            Strategy("whoisxml", self._from_whois, self._assess, enabled=bool(self.ctx.config.whois_api_key)),
            Strategy("dns_heuristic", self._from_nameservers, self._assess),
        )

    async def _from_whois(self, subject: UrlSubject) -> dict:
        record = await fetch_whois_record(self.ctx, subject.root_domain)
        created = record_text(record, "createdDate")
        if not created:
            created = record_text(record_section(record, "registryData"), "createdDate")
        if not created:
            raise ProbeError("WHOIS record has no creation date")
        age_days = max(0, (self.ctx.now() - _provider_date(created)).days)
        return {"age_days": age_days, "created_date": created, "estimated": False}

    async def _from_nameservers(self, subject: UrlSubject) -> dict:
        nameservers = await self.ctx.dns.resolve(subject.root_domain, "NS")
        if not nameservers:
            raise ProbeError(f"no NS records for {subject.root_domain}")
        managed = any(provider in ns.lower() for ns in nameservers for provider in MANAGED_DNS_PROVIDERS)
        return {
            "age_days": MANAGED_DNS_AGE_DAYS if managed else UNMANAGED_DNS_AGE_DAYS,
            "nameservers": nameservers[:3],
            "estimated": True,
        }

    def _assess(self, subject, signal) -> Assessment:
        days = signal["age_days"]
        prefix = "Estimated" if signal["estimated"] else "Registered"
        return Assessment(age_credit(days), f"{prefix} domain age: {days} days", signal)


# =============================================================================
# TLS CERTIFICATE
# =============================================================================

class TlsCertificateProbe(Probe):
    probe_id = ProbeId.TLS_CERTIFICATE

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    async def probe(self, subject: UrlSubject) -> ProbeOutcome:
        if subject.scheme != "https":
            return self.ok(0.0, "Site does not use HTTPS", https=False)

        info = await self.ctx.certificates.fetch(subject.host)
        if not info.verified:
            return self.ok(0.0, f"Invalid certificate: {info.error}", https=True, valid=False, error=info.error)

        now = self.ctx.now()
        if info.not_after is None:
            return self.ok(0.9, "Valid certificate (expiry unknown)", https=True, valid=True, issuer=info.issuer)
        if now > info.not_after or (info.not_before is not None and now < info.not_before):
            return self.ok(0.0, "Certificate outside its validity period", https=True, valid=False,
                           valid_to=info.not_after.isoformat())

        days_left = (info.not_after - now).days
        detail = dict(https=True, valid=True, issuer=info.issuer, days_remaining=days_left,
                      valid_to=info.not_after.isoformat())
        if days_left > 90:
            return self.ok(1.0, f"Valid certificate from {info.issuer or 'unknown issuer'}", **detail)
        return self.ok(0.9, f"Valid certificate, expires in {days_left} days", **detail)


# =============================================================================
# THREAT LISTS
# =============================================================================

class ThreatListProbe(FallbackProbe):
    probe_id = ProbeId.THREAT_LIST

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    def strategies(self):
        return (
            Strategy("google_safe_browsing", self._safe_browsing, self._assess,
                     enabled=bool(self.ctx.config.safe_browsing_key)),
            Strategy("pattern_heuristic", self._patterns, self._assess),
        )

    async def _safe_browsing(self, subject: UrlSubject) -> List[str]:
        body = {
            "client": {"clientId": SAFE_BROWSING_CLIENT_ID, "clientVersion": SAFE_BROWSING_CLIENT_VERSION},
            "threatInfo": {
                "threatTypes": SAFE_BROWSING_THREAT_TYPES,
                "platformTypes": ["ANY_PLATFORM"],
                "threatEntryTypes": ["URL"],
                "threatEntries": [{"url": subject.url}],
            },
        }
        data = await self.ctx.http.post_json(self.ctx.config.safe_browsing_url, body,
                                             params={"key": self.ctx.config.safe_browsing_key})
        if not isinstance(data, dict):
            raise ProbeError("Safe Browsing returned a non-object body")
        return sorted({m.get("threatType", "UNKNOWN") for m in data.get("matches") or []})

    async def _patterns(self, subject: UrlSubject) -> List[str]:
        return ["PATTERN_MATCH"] if matches_phishing_pattern(subject.host) else []

    def _assess(self, subject, threats: List[str]) -> Assessment:
        if threats:
            return Assessment(0.0, f"Listed as threat: {', '.join(threats)}", {"safe": False, "threats": threats})
        return Assessment(1.0, "No threat-list match", {"safe": True, "threats": []})


# =============================================================================
# DNS RECORDS
# =============================================================================

class DnsRecordsProbe(Probe):
    probe_id = ProbeId.DNS_RECORDS

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    async def _lookup(self, name: str, rdtype: str) -> Optional[List[str]]:
        try:
            return await self.ctx.dns.resolve(name, rdtype)
        except DnsLookupError as e:
            logger.debug(f"{rdtype} {name}: {e}")
            return None

    async def probe(self, subject: UrlSubject) -> ProbeOutcome:
        queries = [
            (subject.host, "A"),
            (subject.host, "MX"),
            (subject.host, "NS"),
            (subject.host, "TXT"),
            (f"_dmarc.{subject.root_domain}", "TXT"),
        ]
        results = await asyncio.gather(*(self._lookup(name, rdtype) for name, rdtype in queries))
        if all(r is None for r in results):
            raise ProbeError("all DNS lookups failed")

        a, mx, ns, txt, dmarc = (r or [] for r in results)
        has_spf = any("v=spf1" in t.lower() for t in txt)
        has_dmarc = any("v=dmarc1" in t.lower() for t in dmarc)
        detail = dict(a_count=len(a), mx_count=len(mx), ns_count=len(ns), has_spf=has_spf, has_dmarc=has_dmarc)

        if not (a or mx or ns or txt):
            return self.ok(0.0, "No DNS records", has_records=False, **detail)

        credit = 0.5
        found = []
        if mx:
            credit += 0.2
            found.append("MX")
        if has_spf:
            credit += 0.15
            found.append("SPF")
        if has_dmarc:
            credit += 0.15
            found.append("DMARC")
        summary = f"DNS records present ({', '.join(found)})" if found else "DNS records present, no mail setup"
        return self.ok(min(1.0, round(credit, 4)), summary, has_records=True, **detail)


# =============================================================================
# WHOIS REGISTRATION
# =============================================================================

class WhoisProbe(FallbackProbe):
    probe_id = ProbeId.WHOIS

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    def strategies(self):
        return (
            Strategy("whoisxml", self._from_whois, self._assess, enabled=bool(self.ctx.config.whois_api_key)),
            Strategy("dns_fallback", self._from_dns, self._assess),
        )

    async def _from_whois(self, subject: UrlSubject) -> dict:
        record = await fetch_whois_record(self.ctx, subject.root_domain)
        if record.get("dataError"):
            return {"registered": False, "registrar": None}
        return {
            "registered": True,
            "registrar": record_text(record, "registrarName"),
            "created_date": record_text(record, "createdDate"),
            "expires_date": record_text(record, "expiresDate"),
            "country": record_text(record_section(record, "registrant"), "country"),
        }

    async def _from_dns(self, subject: UrlSubject) -> dict:
        addresses = await self.ctx.dns.resolve(subject.root_domain, "A")
        return {"registered": bool(addresses), "registrar": None}

    def _assess(self, subject, signal) -> Assessment:
        if not signal["registered"]:
            return Assessment(0.0, "Domain does not appear to be registered", signal)
        registrar = signal.get("registrar")
        if registrar and registrar.lower() != "unknown":
            return Assessment(1.0, f"Registered with {registrar}", signal)
        return Assessment(0.6, "Registered, registrar unknown", signal)


# =============================================================================
# REPUTATION
# =============================================================================

class ReputationProbe(FallbackProbe):
    probe_id = ProbeId.REPUTATION

    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    def strategies(self):
        return (
            Strategy("ipqualityscore", self._from_ipqs, self._assess, enabled=bool(self.ctx.config.ipqs_key)),
            Strategy("heuristic", self._from_heuristic, self._assess),
        )

    async def _from_ipqs(self, subject: UrlSubject) -> dict:
        url = f"{self.ctx.config.ipqs_url}/{self.ctx.config.ipqs_key}/{quote(subject.url, safe='')}"
        data = await self.ctx.http.get_json(url)
        risk = data.get("risk_score") if isinstance(data, dict) else None
        if isinstance(risk, bool) or not isinstance(risk, (int, float)):
            raise ProbeError("IPQualityScore response has no numeric risk_score")
        return {
            "score": max(0, min(100, 100 - risk)),
            "phishing": bool(data.get("phishing")),
            "malware": bool(data.get("malware")),
            "suspicious": bool(data.get("suspicious")),
            "category": data.get("category") or "Unknown",
        }

    async def _from_heuristic(self, subject: UrlSubject) -> dict:
        score, factors = heuristic_reputation(subject)
        return {"score": score, "factors": factors}

    def _assess(self, subject, signal) -> Assessment:
        score = signal["score"]
        return Assessment(score / 100, f"Reputation {score}/100", signal)


def build_url_probes(ctx: ScanContext) -> List[Probe]:
    return [
        DomainAgeProbe(ctx),
        TlsCertificateProbe(ctx),
        ThreatListProbe(ctx),
        DnsRecordsProbe(ctx),
        WhoisProbe(ctx),
        ReputationProbe(ctx),
    ]
