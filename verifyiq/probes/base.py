"""
Probe base class.

A probe turns one subject into one ProbeOutcome. ProbeError raised from
probe() (including the DNS/HTTP/TLS errors derived from it) is absorbed
here into a failed outcome; anything else escapes to the scheduler.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..domain.errors import ProbeError
from ..domain.kinds import ProbeId
from ..domain.outcome import ProbeOutcome

logger = logging.getLogger(__name__)


class Probe(ABC):
    probe_id: ProbeId
    # None -> scheduler default
    timeout: Optional[float] = None

    async def run(self, subject: Any) -> ProbeOutcome:
        try:
            return await self.probe(subject)
        except ProbeError as e:
            logger.info(f"Probe {self.probe_id.value} failed: {e}")
            return ProbeOutcome.failed(self.probe_id, str(e))

    @abstractmethod
    async def probe(self, subject: Any) -> ProbeOutcome:
        """Collect the signal and map it to credit."""

    def ok(self, credit: float, explanation: str, **detail) -> ProbeOutcome:
        return ProbeOutcome.ok(self.probe_id, credit, explanation, detail)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.probe_id.value}>"
