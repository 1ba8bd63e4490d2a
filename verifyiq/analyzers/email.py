"""
Email verifier.

Syntax is checked during validation: an address that fails it is a
structural error and never reaches DNS.
"""
from ..domain.kinds import Kind, ProbeId
from ..probes.email import build_email_probes
from .base import ScoringService, outcome_of


def risk_level(score: int) -> str:
    if score >= 80:
        return "low"
    if score >= 60:
        return "medium"
    if score >= 30:
        return "high"
    return "critical"


class EmailVerifier(ScoringService):
    kind = Kind.EMAIL

    def build_probes(self, subject):
        return build_email_probes(self.ctx)

    def describe(self, subject, score, outcomes):
        suggestions = []
        typo = outcome_of(outcomes, ProbeId.TYPO)
        if typo is not None and typo.is_ok and typo.detail.get("suggested_domain"):
            suggestions.append(f"Did you mean {subject.local_part}@{typo.detail['suggested_domain']}?")

        risk_factors = [o.explanation for o in outcomes if o.is_ok and o.detail.get("penalty")]
        free = outcome_of(outcomes, ProbeId.FREE_PROVIDER)
        return {
            "email": subject.address,
            "domain": subject.domain,
            "is_free_provider": bool(free is not None and free.is_ok and free.detail.get("is_free")),
            "risk_level": risk_level(score),
            "risk_factors": risk_factors,
            "suggestions": suggestions,
        }

    async def verify(self, email: str):
        return await self.score({"email": email})
