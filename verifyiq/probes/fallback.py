"""
Fallback chains: try the provider, else the heuristic.

Each Strategy fetches its own raw signal and maps it to credit with its own
assess() function. The chain tries strategies top-down and stops at the
first one that produced a signal.
"""
import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Sequence, Tuple

from ..domain.errors import ProbeError
from ..domain.outcome import ProbeOutcome
from .base import Probe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assessment:
    credit: float
    explanation: str
    detail: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Strategy:
    name: str
    fetch: Callable[[Any], Awaitable[Any]]
    assess: Callable[[Any, Any], Assessment]
    enabled: bool = True


class FallbackChain:
    def __init__(self, strategies: Sequence[Strategy]):
        self.strategies = tuple(strategies)

    async def resolve(self, subject: Any) -> Tuple[Strategy, Any]:
        """
        Run strategies in order until one returns a signal.

        Raises:
            ProbeError: every enabled strategy failed (reasons joined)
        """
        errors: List[str] = []
        for strategy in self.strategies:
            if not strategy.enabled:
                continue
            try:
                return strategy, await strategy.fetch(subject)
            except ProbeError as e:
                logger.debug(f"Strategy {strategy.name} failed, falling back: {e}")
                errors.append(f"{strategy.name}: {e}")
        if not errors:
            raise ProbeError("no strategy enabled")
        raise ProbeError("; ".join(errors))


class FallbackProbe(Probe):
    """Probe whose signal comes from the first working strategy."""

    @abstractmethod
    def strategies(self) -> Sequence[Strategy]:
        """Strategies in preference order."""

    async def probe(self, subject: Any) -> ProbeOutcome:
        strategy, signal = await FallbackChain(self.strategies()).resolve(subject)
        assessment = strategy.assess(subject, signal)
        detail = {"source": strategy.name, **assessment.detail}
        return ProbeOutcome.ok(self.probe_id, assessment.credit, assessment.explanation, detail)
