"""
Rug pull / honeypot analyzer.

Allow-listed contracts skip the probes. When the honeypot simulation is
unavailable the verdict is 'unknown' with a link for a manual check,
regardless of the score.
"""
from types import MappingProxyType

from ..blocklists import KNOWN_SAFE_CONTRACTS
from ..domain.envelope import ResultEnvelope
from ..domain.kinds import Kind, ProbeId
from ..domain.verdict import RugPullVerdict
from ..probes.rugpull import build_rugpull_probes
from .base import ScoringService, outcome_of, subject_metadata

MANUAL_CHECK_URL = "https://honeypot.is/?address={address}"

SUMMARIES = {
    RugPullVerdict.SAFE: "SAFE: no honeypot detected",
    RugPullVerdict.CAUTION: "CAUTION: elevated tax or weak liquidity",
    RugPullVerdict.HIGH_RISK: "HIGH RISK: proceed with extreme caution",
    RugPullVerdict.DANGEROUS: "DANGEROUS: token is likely unsellable",
    RugPullVerdict.UNKNOWN: "UNKNOWN: unable to verify via API, check manually on HoneyPot.is",
}


class RugPullAnalyzer(ScoringService):
    kind = Kind.RUGPULL

    def short_circuit(self, subject):
        if subject.address not in KNOWN_SAFE_CONTRACTS:
            return None
        return ResultEnvelope(
            kind=self.kind,
            score=100,
            verdict=RugPullVerdict.SAFE,
            subject=MappingProxyType(subject_metadata(subject)),
            details=MappingProxyType({
                "whitelisted": True,
                "is_honeypot": False,
                "buy_tax": 0,
                "sell_tax": 0,
                "liquidity": "High",
                "lp_locked": True,
                "summary": "SAFE: whitelisted, well-known established token",
            }),
            weights=self.weights,
        )

    def build_probes(self, subject):
        return build_rugpull_probes(self.ctx)

    def verdict_for(self, score, outcomes):
        honeypot = outcome_of(outcomes, ProbeId.HONEYPOT_SIMULATION)
        if honeypot is None or not honeypot.is_ok:
            return RugPullVerdict.UNKNOWN
        return super().verdict_for(score, outcomes)

    def describe(self, subject, score, outcomes):
        honeypot = outcome_of(outcomes, ProbeId.HONEYPOT_SIMULATION)
        verdict = self.verdict_for(score, outcomes)
        if honeypot is not None and honeypot.is_ok:
            detail = honeypot.detail
            summary = "HONEYPOT: cannot sell this token" if detail.get("is_honeypot") else SUMMARIES[verdict]
            return {
                "whitelisted": False,
                "is_honeypot": detail.get("is_honeypot"),
                "buy_tax": detail.get("buy_tax"),
                "sell_tax": detail.get("sell_tax"),
                "liquidity": detail.get("liquidity"),
                "lp_locked": detail.get("lp_locked"),
                "token_name": detail.get("token_name"),
                "token_symbol": detail.get("token_symbol"),
                "signals": list(detail.get("signals", ())),
                "summary": summary,
            }
        return {
            "whitelisted": False,
            "is_honeypot": None,
            "buy_tax": None,
            "sell_tax": None,
            "liquidity": None,
            "lp_locked": None,
            "summary": SUMMARIES[RugPullVerdict.UNKNOWN],
            "manual_check_url": MANUAL_CHECK_URL.format(address=subject.address),
        }
