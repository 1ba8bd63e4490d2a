"""
Result envelope returned by every scoring service.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .kinds import Kind
from .outcome import ProbeOutcome
from .verdict import Verdict, worst_verdict
from .weights import WeightTable


@dataclass(frozen=True)
class ResultEnvelope:
    kind: Kind
    score: int
    verdict: Verdict
    outcomes: Tuple[ProbeOutcome, ...] = ()
    processing_time_ms: int = 0
    subject: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    error: Optional[str] = None
    weights: Optional[WeightTable] = field(default=None, compare=False, repr=False)

    @classmethod
    def structural_error(cls, kind: Kind, reason: str, processing_time_ms: int = 0) -> "ResultEnvelope":
        """Zero-score envelope for a request that never reached the probes."""
        return cls(
            kind=kind,
            score=0,
            verdict=worst_verdict(kind),
            processing_time_ms=processing_time_ms,
            error=reason,
        )

    @property
    def failed_probes(self) -> Tuple[ProbeOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.is_ok)

    def probe_detail(self) -> list:
        rows = []
        for outcome in self.outcomes:
            weight = self.weights[outcome.probe_id].weight if self.weights and outcome.probe_id in self.weights else None
            rows.append({
                "name": outcome.probe_id.value,
                "outcome": outcome.status.value,
                "credit": outcome.credit,
                "weight": weight,
                "reason": outcome.reason,
                "explanation": outcome.explanation,
                "detail": dict(outcome.detail),
                "duration_ms": outcome.duration_ms,
            })
        return rows

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable form."""
        return {
            "kind": self.kind.value,
            "score": self.score,
            "verdict": self.verdict.value,
            "subject": dict(self.subject),
            "details": dict(self.details),
            "probe_detail": self.probe_detail(),
            "processing_time_ms": self.processing_time_ms,
            "error": self.error,
        }
