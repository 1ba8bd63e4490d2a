"""
Supplier trust score.

Registration, reputation, domain authenticity and contact verification,
all read from one URL scan of the supplier's site.
"""
from ..domain.kinds import Kind, ProbeId
from ..probes.site import build_supplier_probes
from .base import outcome_of
from .site import SiteScanService

SIGNAL_NAMES = {
    ProbeId.REGISTRATION: "registration",
    ProbeId.REVIEWS: "reviews",
    ProbeId.DOMAIN_AUTHENTICITY: "domain_authenticity",
    ProbeId.CONTACT: "contact_verification",
}


def _flags(site):
    flags = []
    for probe_id, test, level, message in (
        (ProbeId.DOMAIN_AGE, lambda d: d["age_days"] < 90, "warning", "Domain registered less than 90 days ago"),
        (ProbeId.TLS_CERTIFICATE, lambda d: not d.get("valid"), "danger", "No valid SSL certificate"),
        (ProbeId.THREAT_LIST, lambda d: not d.get("safe"), "danger", "Flagged in threat databases"),
        (ProbeId.WHOIS, lambda d: not d.get("registered"), "warning", "Domain registration could not be verified"),
        (ProbeId.DNS_RECORDS, lambda d: d.get("mx_count", 0) == 0, "warning", "No mail server configured"),
    ):
        outcome = outcome_of(site.scan.outcomes, probe_id)
        if outcome is not None and outcome.is_ok and test(outcome.detail):
            flags.append({"level": level, "message": message})
    return flags


class SupplierScorer(SiteScanService):
    kind = Kind.SUPPLIER

    def build_probes(self, subject):
        return build_supplier_probes()

    def describe(self, subject, score, outcomes):
        signals = {}
        for probe_id, name in SIGNAL_NAMES.items():
            outcome = outcome_of(outcomes, probe_id)
            signals[name] = round(outcome.credit * 100) if outcome is not None and outcome.is_ok else None
        return {
            "domain": subject.host,
            "url_score": subject.scan.score,
            "signals": signals,
            "flags": _flags(subject),
        }
