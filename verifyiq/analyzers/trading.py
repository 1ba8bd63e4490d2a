"""
Trading platform shield.

Six pass/fail checks of equal weight. Verdict is the platform's risk level.
"""
from ..domain.kinds import Kind, ProbeId
from ..probes.site import build_trading_probes
from .base import outcome_of
from .site import SiteScanService

CHECK_NAMES = {
    ProbeId.SSL_SECURITY: "SSL Security",
    ProbeId.DOMAIN_MATURITY: "Domain Age",
    ProbeId.THREAT_DATABASE: "Threat Database",
    ProbeId.EXCHANGE_VERIFICATION: "Exchange Verification",
    ProbeId.CLONE_DETECTION: "Clone Detection",
    ProbeId.REGISTRATION_QUALITY: "Registration",
}


def _failed(outcomes, probe_id) -> bool:
    outcome = outcome_of(outcomes, probe_id)
    return outcome is not None and outcome.is_ok and outcome.credit == 0.0


class TradingShield(SiteScanService):
    kind = Kind.TRADING_SHIELD

    def build_probes(self, subject):
        return build_trading_probes()

    def describe(self, subject, score, outcomes):
        checks = []
        for outcome in outcomes:
            checks.append({
                "name": CHECK_NAMES[outcome.probe_id],
                "passed": outcome.credit == 1.0 if outcome.is_ok else None,
                "detail": outcome.explanation if outcome.is_ok else outcome.reason,
            })

        alerts = []
        clone = outcome_of(outcomes, ProbeId.CLONE_DETECTION)
        if _failed(outcomes, ProbeId.CLONE_DETECTION):
            alerts.append({"type": "danger", "message": f"Possible clone of {clone.detail['resembles']}"})
        if _failed(outcomes, ProbeId.SSL_SECURITY):
            alerts.append({"type": "danger", "message": "No valid SSL, never enter credentials"})
        if _failed(outcomes, ProbeId.THREAT_DATABASE):
            alerts.append({"type": "danger", "message": "Listed in threat databases"})
        maturity = outcome_of(outcomes, ProbeId.DOMAIN_MATURITY)
        if maturity is not None and maturity.is_ok and maturity.detail["age_days"] < 90:
            alerts.append({"type": "warning", "message": "Domain registered less than 90 days ago"})
        exchange = outcome_of(outcomes, ProbeId.EXCHANGE_VERIFICATION)
        if exchange is not None and exchange.is_ok and exchange.credit == 1.0 and not _failed(outcomes, ProbeId.SSL_SECURITY):
            alerts.append({"type": "safe", "message": f"Verified exchange: {exchange.detail['exchange']}"})

        return {
            "domain": subject.host,
            "url_score": subject.scan.score,
            "checks": checks,
            "alerts": alerts,
        }
