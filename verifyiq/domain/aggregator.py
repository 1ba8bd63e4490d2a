"""
Weighted aggregation of probe outcomes into a 0-100 score.
"""
import math
from typing import Iterable

from .outcome import ProbeOutcome
from .weights import WeightTable


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def aggregate(outcomes: Iterable[ProbeOutcome], table: WeightTable) -> int:
    """
    Combine probe outcomes into one score.

    Each scheduled probe contributes weight * credit when it succeeded and
    weight * neutral_credit otherwise. The sum is normalised by the weights of
    the probes actually scheduled, so an unscheduled probe neither helps nor
    hurts.

    Args:
        outcomes: One outcome per scheduled probe (any order)
        table: Weight table of the request's kind

    Returns:
        Integer score 0-100. table.neutral_score when nothing succeeded.

    Raises:
        ValueError: outcome for a probe not in the table, or duplicated
    """
    outcomes = list(outcomes)

    seen = set()
    for outcome in outcomes:
        if outcome.probe_id not in table:
            raise ValueError(f"no weight for probe {outcome.probe_id.value} in {table.kind.value} table")
        if outcome.probe_id in seen:
            raise ValueError(f"duplicate outcome for probe {outcome.probe_id.value}")
        seen.add(outcome.probe_id)

    if not any(o.is_ok for o in outcomes):
        return table.neutral_score

    contributions = []
    weights = []
    for outcome in outcomes:
        entry = table[outcome.probe_id]
        credit = outcome.credit if outcome.is_ok else entry.neutral_credit
        contributions.append(entry.weight * credit)
        weights.append(entry.weight)

    raw = math.fsum(contributions) / math.fsum(weights) * 100
    return max(0, min(100, round_half_up(raw)))
