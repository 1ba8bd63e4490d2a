"""
Probe outcomes.

Every probe produces exactly one ProbeOutcome:
    ok        - signal obtained, credit in [0, 1]
    failed    - data source unavailable, reason set, no credit
    timed_out - scheduler cancelled the probe, reason set, no credit
"""
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .kinds import ProbeId


class ProbeStatus(Enum):
    OK = "ok"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


def _freeze(detail: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(detail or {}))


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one probe. Build through ok() / failed() / timed_out()."""
    probe_id: ProbeId
    status: ProbeStatus
    credit: Optional[float] = None
    reason: Optional[str] = None
    detail: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    explanation: str = ""
    duration_ms: int = 0

    def __post_init__(self):
        if self.status is ProbeStatus.OK:
            if self.credit is None or not math.isfinite(self.credit) or not 0.0 <= self.credit <= 1.0:
                raise ValueError(f"{self.probe_id.value}: credit must be in [0, 1], got {self.credit!r}")
            if self.reason is not None:
                raise ValueError(f"{self.probe_id.value}: ok outcome cannot carry a reason")
        else:
            if self.credit is not None:
                raise ValueError(f"{self.probe_id.value}: {self.status.value} outcome cannot carry credit")
            if not self.reason:
                raise ValueError(f"{self.probe_id.value}: {self.status.value} outcome needs a reason")
        if not isinstance(self.detail, MappingProxyType):
            object.__setattr__(self, "detail", _freeze(self.detail))

    @classmethod
    def ok(cls, probe_id: ProbeId, credit: float, explanation: str = "",
           detail: Optional[Mapping[str, Any]] = None) -> "ProbeOutcome":
        return cls(probe_id, ProbeStatus.OK, credit=float(credit),
                   detail=_freeze(detail), explanation=explanation)

    @classmethod
    def failed(cls, probe_id: ProbeId, reason: str,
               detail: Optional[Mapping[str, Any]] = None) -> "ProbeOutcome":
        return cls(probe_id, ProbeStatus.FAILED, reason=reason,
                   detail=_freeze(detail), explanation=f"Check unavailable: {reason}")

    @classmethod
    def timed_out(cls, probe_id: ProbeId, timeout: float) -> "ProbeOutcome":
        reason = f"timed out after {timeout:g}s"
        return cls(probe_id, ProbeStatus.TIMED_OUT, reason=reason,
                   explanation=f"Check unavailable: {reason}")

    @property
    def is_ok(self) -> bool:
        return self.status is ProbeStatus.OK

    def with_duration(self, duration_ms: int) -> "ProbeOutcome":
        return replace(self, duration_ms=max(0, int(duration_ms)))
