"""
Probe Scheduler.

Runs every probe of a request concurrently, each under its own timeout.
Whatever happens inside a probe, the scheduler returns exactly one outcome
per probe, in the order the probes were given.
"""
import asyncio
import logging
import time
from typing import Any, List, Sequence

from .config import PROBE_TIMEOUT
from .domain.outcome import ProbeOutcome
from .probes.base import Probe

logger = logging.getLogger(__name__)


class ProbeScheduler:
    def __init__(self, default_timeout: float = PROBE_TIMEOUT):
        self.default_timeout = default_timeout

    async def run(self, subject: Any, probes: Sequence[Probe]) -> List[ProbeOutcome]:
        """
        Fan out probes and collect their outcomes.

        No short-circuit and no retries: a slow or failing probe only
        affects its own outcome.
        """
        return list(await asyncio.gather(*(self._run_one(subject, probe) for probe in probes)))

    async def _run_one(self, subject: Any, probe: Probe) -> ProbeOutcome:
        timeout = probe.timeout if probe.timeout is not None else self.default_timeout
        started = time.perf_counter()
        try:
            outcome = await asyncio.wait_for(probe.run(subject), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info(f"Probe {probe.probe_id.value} timed out after {timeout:g}s")
            outcome = ProbeOutcome.timed_out(probe.probe_id, timeout)
        except Exception as e:
            logger.exception(f"Probe {probe.probe_id.value} raised unexpectedly")
            outcome = ProbeOutcome.failed(probe.probe_id, f"{type(e).__name__}: {e}")

        elapsed_ms = (time.perf_counter() - started) * 1000
        return outcome.with_duration(round(elapsed_ms))
