"""
Tests for weighted aggregation.

Run:
    pytest tests/test_aggregator.py -v
"""
import itertools

import pytest

from conftest import failed, ok
from verifyiq.domain.aggregator import aggregate, round_half_up
from verifyiq.domain.kinds import Kind, ProbeId
from verifyiq.domain.outcome import ProbeOutcome
from verifyiq.domain.weights import (
    DARKWEB_WEIGHTS,
    RUGPULL_WEIGHTS,
    SOCIAL_WEIGHTS,
    URL_WEIGHTS,
    WEIGHT_TABLES,
)

URL_PROBES = [
    ProbeId.DOMAIN_AGE, ProbeId.TLS_CERTIFICATE, ProbeId.THREAT_LIST,
    ProbeId.DNS_RECORDS, ProbeId.WHOIS, ProbeId.REPUTATION,
]


class TestRounding:
    def test_half_rounds_up(self):
        assert round_half_up(62.5) == 63
        assert round_half_up(63.5) == 64

    def test_below_half_rounds_down(self):
        assert round_half_up(62.49) == 62


class TestAggregateBounds:
    """Score extremes and the neutral score."""

    @pytest.mark.parametrize("kind", list(Kind))
    def test_all_full_credit_is_100(self, kind):
        table = WEIGHT_TABLES[kind]
        outcomes = [ok(pid, 1.0) for pid in table]
        assert aggregate(outcomes, table) == 100

    @pytest.mark.parametrize("kind", list(Kind))
    def test_all_zero_credit_is_0(self, kind):
        table = WEIGHT_TABLES[kind]
        outcomes = [ok(pid, 0.0) for pid in table]
        assert aggregate(outcomes, table) == 0

    @pytest.mark.parametrize("kind", list(Kind))
    def test_all_neutral_credit_is_neutral_score(self, kind):
        table = WEIGHT_TABLES[kind]
        outcomes = [ok(pid, table[pid].neutral_credit) for pid in table]
        assert aggregate(outcomes, table) == table.neutral_score

    def test_all_failed_is_neutral_score(self):
        outcomes = [failed(pid) for pid in URL_PROBES]
        assert aggregate(outcomes, URL_WEIGHTS) == URL_WEIGHTS.neutral_score == 50

    def test_no_outcomes_is_neutral_score(self):
        assert aggregate([], URL_WEIGHTS) == 50

    def test_timed_out_counts_as_neutral(self):
        outcomes = [ok(pid, 1.0) for pid in URL_PROBES[1:]]
        outcomes.append(ProbeOutcome.timed_out(ProbeId.DOMAIN_AGE, 10))
        # 75 full + 25 * 0.5 = 87.5 -> 88
        assert aggregate(outcomes, URL_WEIGHTS) == 88


class TestAggregateWeighting:
    def test_single_failure_uses_neutral_credit(self):
        outcomes = [ok(pid, 1.0) for pid in URL_PROBES if pid is not ProbeId.THREAT_LIST]
        outcomes.append(failed(ProbeId.THREAT_LIST))
        # 70 + 30 * 0.5 = 85
        assert aggregate(outcomes, URL_WEIGHTS) == 85

    def test_normalises_by_scheduled_probes_only(self):
        # account_age not scheduled: 35 + 30 + 15 = 80 total weight
        outcomes = [
            ok(ProbeId.FOLLOWER_RATIO, 1.0),
            ok(ProbeId.ENGAGEMENT, 0.0),
            ok(ProbeId.VERIFICATION, 1.0),
        ]
        assert aggregate(outcomes, SOCIAL_WEIGHTS) == round_half_up(50 / 80 * 100)

    def test_rugpull_mixed(self):
        outcomes = [ok(ProbeId.HONEYPOT_SIMULATION, 0.5), ok(ProbeId.ADDRESS_PATTERN, 1.0)]
        # (35 + 10) / 80 = 56.25
        assert aggregate(outcomes, RUGPULL_WEIGHTS) == 56

    def test_order_independent(self):
        base = [
            ok(ProbeId.MARKETPLACE_MATCH, 0.0),
            ok(ProbeId.TLD_RISK, 1.0),
            failed(ProbeId.PHISHING_PATTERN),
            ok(ProbeId.THREAT_CROSS_REFERENCE, 0.37),
        ]
        scores = {aggregate(list(p), DARKWEB_WEIGHTS) for p in itertools.permutations(base)}
        assert len(scores) == 1

    def test_deterministic(self):
        outcomes = [ok(pid, 0.33) for pid in URL_PROBES]
        assert aggregate(outcomes, URL_WEIGHTS) == aggregate(outcomes, URL_WEIGHTS) == 33

    def test_score_within_bounds_for_credit_grid(self):
        for credit in (0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0):
            score = aggregate([ok(pid, credit) for pid in URL_PROBES], URL_WEIGHTS)
            assert 0 <= score <= 100


class TestAggregateErrors:
    def test_probe_of_other_kind_rejected(self):
        with pytest.raises(ValueError, match="no weight"):
            aggregate([ok(ProbeId.FOLLOWER_RATIO, 1.0)], URL_WEIGHTS)

    def test_duplicate_outcome_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            aggregate([ok(ProbeId.WHOIS, 1.0), ok(ProbeId.WHOIS, 0.0)], URL_WEIGHTS)
