"""
Dropship detector.

The score is trust; dropship likelihood is reported as 100 - score.
"""
from urllib.parse import quote

from ..domain.kinds import Kind
from ..probes.dropship import build_dropship_probes, estimate_markup
from .base import ScoringService

ALIEXPRESS_SEARCH_URL = "https://www.aliexpress.com/wholesale?SearchText={query}"
ALIBABA_SEARCH_URL = "https://www.alibaba.com/trade/search?SearchText={query}"


def likelihood_summary(likelihood: int) -> str:
    if likelihood >= 70:
        return "Highly likely dropshipped product"
    if likelihood >= 40:
        return "Possible dropship, check source pricing"
    return "Low dropship indicators"


class DropshipDetector(ScoringService):
    kind = Kind.DROPSHIP

    def build_probes(self, subject):
        return build_dropship_probes(subject)

    def describe(self, subject, score, outcomes):
        likelihood = 100 - score
        category, source_price, multiplier = estimate_markup(subject)

        flags = []
        for outcome in outcomes:
            if outcome.is_ok and outcome.credit < 1.0:
                flags.append(outcome.explanation)

        query = quote(subject.title, safe="")
        return {
            "likelihood": likelihood,
            "summary": likelihood_summary(likelihood),
            "store_price": subject.price,
            "currency": subject.currency,
            "category": category or "unknown",
            "estimated_source_price": source_price,
            "markup_multiplier": round(multiplier, 2) if multiplier is not None else None,
            "flags": flags,
            "search_url": ALIEXPRESS_SEARCH_URL.format(query=query),
            "alibaba_url": ALIBABA_SEARCH_URL.format(query=query),
        }
