"""
Scoring service pipeline shared by every analyzer.

    validate -> short-circuit? -> build probes -> schedule -> aggregate
             -> classify -> envelope
"""
import dataclasses
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..domain.aggregator import aggregate
from ..domain.envelope import ResultEnvelope
from ..domain.errors import StructuralError
from ..domain.kinds import Kind
from ..domain.outcome import ProbeOutcome
from ..domain.subjects import ScoreRequest, Subject, validate
from ..domain.verdict import Verdict, classify
from ..domain.weights import WEIGHT_TABLES
from ..probes.base import Probe
from ..probes.context import ScanContext
from ..scheduler import ProbeScheduler

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return round((time.perf_counter() - started) * 1000)


def subject_metadata(subject: Subject) -> Dict[str, Any]:
    meta = dataclasses.asdict(subject)
    for key, value in meta.items():
        if isinstance(value, datetime):
            meta[key] = value.isoformat()
    return meta


class ScoringService(ABC):
    kind: Kind

    def __init__(self, ctx: Optional[ScanContext] = None, scheduler: Optional[ProbeScheduler] = None):
        self.ctx = ctx or ScanContext.default()
        self.scheduler = scheduler or ProbeScheduler(self.ctx.config.probe_timeout)
        self.weights = WEIGHT_TABLES[self.kind]

    async def score(self, payload: Mapping[str, Any]) -> ResultEnvelope:
        """
        Score a raw payload.

        Never raises for bad input or unavailable data sources: a malformed
        payload yields a zero-score envelope with error set, an unavailable
        probe shows up in probe_detail.
        """
        started = time.perf_counter()
        try:
            request = validate(self.kind, payload)
        except StructuralError as e:
            logger.info(f"Rejected {self.kind.value} request: {e}")
            return ResultEnvelope.structural_error(self.kind, str(e), _elapsed_ms(started))
        envelope = await self.score_request(request)
        return dataclasses.replace(envelope, processing_time_ms=_elapsed_ms(started))

    async def score_request(self, request: ScoreRequest) -> ResultEnvelope:
        subject = request.subject

        shortcut = self.short_circuit(subject)
        if shortcut is not None:
            logger.debug(f"{self.kind.value} short-circuited: {shortcut.verdict.value}")
            return shortcut

        probes = self.build_probes(subject)
        self.weights.require(p.probe_id for p in probes)

        outcomes = await self.scheduler.run(subject, probes)
        score = aggregate(outcomes, self.weights)
        cap = self.score_cap(outcomes)
        if cap is not None and score > cap:
            logger.debug(f"{self.kind.value} score {score} capped at {cap}")
            score = cap
        verdict = self.verdict_for(score, outcomes)

        failed = [o.probe_id.value for o in outcomes if not o.is_ok]
        if failed:
            logger.info(f"{self.kind.value} scored {score} with unavailable probes: {failed}")

        return ResultEnvelope(
            kind=self.kind,
            score=score,
            verdict=verdict,
            outcomes=tuple(outcomes),
            subject=MappingProxyType(self.metadata(subject)),
            details=MappingProxyType(self.describe(subject, score, outcomes)),
            weights=self.weights,
        )

    def short_circuit(self, subject: Subject) -> Optional[ResultEnvelope]:
        """Return a finished envelope to skip the probes entirely."""
        return None

    def metadata(self, subject: Subject) -> Dict[str, Any]:
        return subject_metadata(subject)

    def score_cap(self, outcomes: Sequence[ProbeOutcome]) -> Optional[int]:
        """Ceiling for the aggregate score, None for no ceiling."""
        return None

    @abstractmethod
    def build_probes(self, subject: Subject) -> List[Probe]:
        """Probes to schedule for this subject."""

    def verdict_for(self, score: int, outcomes: Sequence[ProbeOutcome]) -> Verdict:
        return classify(score, self.kind)

    def describe(self, subject: Subject, score: int, outcomes: Sequence[ProbeOutcome]) -> Dict[str, Any]:
        """Kind-specific detail map."""
        return {}


def outcome_of(outcomes: Sequence[ProbeOutcome], probe_id) -> Optional[ProbeOutcome]:
    return next((o for o in outcomes if o.probe_id is probe_id), None)
