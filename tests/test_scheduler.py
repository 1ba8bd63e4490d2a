"""
Tests for ProbeScheduler and the fallback chain.
"""
import asyncio
import time

import pytest

from conftest import ExplodingProbe, SlowProbe, StaticProbe
from verifyiq.domain.errors import HttpError, ProbeError
from verifyiq.domain.kinds import ProbeId
from verifyiq.domain.outcome import ProbeStatus
from verifyiq.probes.fallback import Assessment, FallbackChain, FallbackProbe, Strategy
from verifyiq.scheduler import ProbeScheduler


def run(coro):
    return asyncio.run(coro)


class TestProbeScheduler:
    def test_one_outcome_per_probe_in_order(self):
        probes = [
            StaticProbe(ProbeId.DOMAIN_AGE, 0.2),
            StaticProbe(ProbeId.WHOIS, 0.9),
            StaticProbe(ProbeId.REPUTATION, 0.5),
        ]
        outcomes = run(ProbeScheduler().run("subject", probes))
        assert [o.probe_id for o in outcomes] == [ProbeId.DOMAIN_AGE, ProbeId.WHOIS, ProbeId.REPUTATION]
        assert [o.credit for o in outcomes] == [0.2, 0.9, 0.5]

    def test_timeout_becomes_timed_out(self):
        probes = [SlowProbe(ProbeId.DOMAIN_AGE, delay=5), StaticProbe(ProbeId.WHOIS)]
        outcomes = run(ProbeScheduler(default_timeout=0.05).run("subject", probes))
        assert outcomes[0].status is ProbeStatus.TIMED_OUT
        assert outcomes[0].credit is None
        assert outcomes[1].is_ok

    def test_probe_timeout_overrides_default(self):
        probes = [SlowProbe(ProbeId.DOMAIN_AGE, delay=0.1, timeout=2)]
        outcomes = run(ProbeScheduler(default_timeout=0.01).run("subject", probes))
        assert outcomes[0].is_ok

    def test_probe_error_becomes_failed(self):
        probes = [ExplodingProbe(ProbeId.THREAT_LIST, HttpError("HTTP 503 from example.com"))]
        outcomes = run(ProbeScheduler().run("subject", probes))
        assert outcomes[0].status is ProbeStatus.FAILED
        assert outcomes[0].reason == "HTTP 503 from example.com"

    def test_unexpected_exception_becomes_failed(self):
        probes = [ExplodingProbe(ProbeId.THREAT_LIST, KeyError("boom")), StaticProbe(ProbeId.WHOIS)]
        outcomes = run(ProbeScheduler().run("subject", probes))
        assert outcomes[0].status is ProbeStatus.FAILED
        assert outcomes[0].reason.startswith("KeyError")
        assert outcomes[1].is_ok

    def test_probes_run_concurrently(self):
        probes = [SlowProbe(pid, delay=0.2) for pid in (ProbeId.DOMAIN_AGE, ProbeId.WHOIS, ProbeId.REPUTATION)]
        started = time.perf_counter()
        outcomes = run(ProbeScheduler().run("subject", probes))
        assert time.perf_counter() - started < 0.55
        assert all(o.is_ok for o in outcomes)

    def test_duration_recorded(self):
        outcomes = run(ProbeScheduler().run("subject", [SlowProbe(ProbeId.WHOIS, delay=0.05)]))
        assert outcomes[0].duration_ms >= 40

    def test_empty_probe_list(self):
        assert run(ProbeScheduler().run("subject", [])) == []


async def _fail(subject):
    raise ProbeError("provider down")


async def _signal(subject):
    return 42


def _assess(subject, signal):
    return Assessment(credit=1.0, explanation=f"signal {signal}", detail={"signal": signal})


class TestFallbackChain:
    def test_first_working_strategy_wins(self):
        chain = FallbackChain([Strategy("provider", _fail, _assess), Strategy("heuristic", _signal, _assess)])
        strategy, signal = run(chain.resolve("x"))
        assert strategy.name == "heuristic"
        assert signal == 42

    def test_disabled_strategy_skipped(self):
        calls = []

        async def spy(subject):
            calls.append(subject)
            return 1

        chain = FallbackChain([Strategy("provider", spy, _assess, enabled=False), Strategy("heuristic", _signal, _assess)])
        strategy, _ = run(chain.resolve("x"))
        assert strategy.name == "heuristic"
        assert calls == []

    def test_all_failed_reasons_joined(self):
        chain = FallbackChain([Strategy("a", _fail, _assess), Strategy("b", _fail, _assess)])
        with pytest.raises(ProbeError, match="a: provider down; b: provider down"):
            run(chain.resolve("x"))

    def test_nothing_enabled(self):
        chain = FallbackChain([Strategy("a", _signal, _assess, enabled=False)])
        with pytest.raises(ProbeError, match="no strategy enabled"):
            run(chain.resolve("x"))


class _ChainedProbe(FallbackProbe):
    probe_id = ProbeId.REPUTATION

    def __init__(self, strategies):
        self._strategies = strategies

    def strategies(self):
        return self._strategies


class TestFallbackProbe:
    def test_detail_names_source(self):
        probe = _ChainedProbe([Strategy("provider", _fail, _assess), Strategy("heuristic", _signal, _assess)])
        outcome = run(probe.run("x"))
        assert outcome.is_ok
        assert outcome.detail["source"] == "heuristic"
        assert outcome.detail["signal"] == 42

    def test_exhausted_chain_is_failed_outcome(self):
        probe = _ChainedProbe([Strategy("provider", _fail, _assess)])
        outcome = run(probe.run("x"))
        assert outcome.status is ProbeStatus.FAILED
        assert "provider down" in outcome.reason
