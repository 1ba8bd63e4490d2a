"""
Dark web exposure scan.

Scores the domain on marketplace, TLD and phishing-pattern matches plus a
nested URL scan. Onion mirrors and breach-monitoring services are reported
as findings only.
"""
from ..blocklists import BREACH_SERVICES, ONION_MIRRORS
from ..domain.kinds import Kind, ProbeId
from ..probes.darkweb import bare_domain, build_darkweb_probes
from .base import ScoringService
from .url import UrlScanner


def _listed(domain: str, entries) -> bool:
    return any(domain == entry or domain.endswith("." + entry) for entry in entries)


class DarkWebScanner(ScoringService):
    kind = Kind.DARKWEB

    def __init__(self, ctx=None, scheduler=None, url_scanner=None):
        super().__init__(ctx, scheduler)
        self.url_scanner = url_scanner or UrlScanner(self.ctx, self.scheduler)

    def build_probes(self, subject):
        return build_darkweb_probes(self.url_scanner.score_url, self.ctx.config.cross_reference_timeout)

    def describe(self, subject, score, outcomes):
        domain = bare_domain(subject)
        findings = []

        if _listed(domain, ONION_MIRRORS):
            findings.append({
                "title": "Official .onion Mirror Exists",
                "detail": "This site maintains an official presence on the Tor network.",
                "source": "Tor Directory Index",
            })

        scan_data = None
        for outcome in outcomes:
            if not outcome.is_ok:
                continue
            if "finding" in outcome.detail:
                findings.append(outcome.detail["finding"])
            if outcome.probe_id is ProbeId.THREAT_CROSS_REFERENCE:
                findings.extend(outcome.detail.get("findings", ()))
                scan_data = {
                    "score": outcome.detail.get("url_score"),
                    "verdict": outcome.detail.get("url_verdict"),
                }

        if _listed(domain, BREACH_SERVICES):
            findings.append({
                "title": "Data Breach Investigation Service",
                "detail": "Known breach monitoring service. It aggregates data that circulates on the dark web.",
                "source": "Service Classification",
            })

        if len(findings) >= 3:
            risk_level = "high"
        elif findings:
            risk_level = "medium"
        else:
            risk_level = "clean"

        return {
            "domain": domain,
            "found_on_darkweb": bool(findings),
            "total_findings": len(findings),
            "risk_level": risk_level,
            "findings": findings,
            "scan_data": scan_data,
        }
