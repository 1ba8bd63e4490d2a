"""
Weight tables.

One table per artifact kind: ProbeId -> (weight, neutral credit) plus the
score returned when no probe produced a signal. Tables are validated when
built, so a typo in a probe id fails at import, not at request time.
"""
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from .errors import WeightTableError
from .kinds import KIND_PROBES, Kind, ProbeId

# Credit assumed for a probe that did not produce a signal
NEUTRAL_CREDIT = 0.5
NEUTRAL_SCORE = 50


@dataclass(frozen=True)
class ProbeWeight:
    weight: float
    neutral_credit: float = NEUTRAL_CREDIT


class WeightTable:
    """Validated, read-only weight table for one kind."""

    def __init__(self, kind: Kind, weights: Mapping[ProbeId, ProbeWeight],
                 neutral_score: int = NEUTRAL_SCORE):
        expected = KIND_PROBES[kind]
        given = set(weights)

        foreign = given - expected
        if foreign:
            names = sorted(p.value for p in foreign)
            raise WeightTableError(f"{kind.value}: probes not part of this kind: {names}")
        missing = expected - given
        if missing:
            names = sorted(p.value for p in missing)
            raise WeightTableError(f"{kind.value}: missing weights for {names}")

        for probe_id, entry in weights.items():
            if not math.isfinite(entry.weight) or entry.weight <= 0:
                raise WeightTableError(f"{kind.value}.{probe_id.value}: weight must be > 0, got {entry.weight}")
            if not math.isfinite(entry.neutral_credit) or not 0.0 <= entry.neutral_credit <= 1.0:
                raise WeightTableError(
                    f"{kind.value}.{probe_id.value}: neutral credit must be in [0, 1], got {entry.neutral_credit}"
                )
        if not 0 <= neutral_score <= 100:
            raise WeightTableError(f"{kind.value}: neutral score must be in [0, 100], got {neutral_score}")

        self.kind = kind
        self.neutral_score = int(neutral_score)
        self._weights = MappingProxyType(dict(weights))

    def __contains__(self, probe_id: ProbeId) -> bool:
        return probe_id in self._weights

    def __getitem__(self, probe_id: ProbeId) -> ProbeWeight:
        return self._weights[probe_id]

    def __iter__(self):
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def require(self, probe_ids) -> None:
        """Raise WeightTableError if any of the probe ids has no entry."""
        unknown = [p for p in probe_ids if p not in self._weights]
        if unknown:
            names = sorted(p.value for p in unknown)
            raise WeightTableError(f"{self.kind.value}: no weight for {names}")

    @property
    def total_weight(self) -> float:
        return math.fsum(w.weight for w in self._weights.values())


def _table(kind: Kind, weights: Dict[ProbeId, float]) -> WeightTable:
    return WeightTable(kind, {pid: ProbeWeight(w) for pid, w in weights.items()})


URL_WEIGHTS = _table(Kind.URL, {
    ProbeId.DOMAIN_AGE: 25,
    ProbeId.TLS_CERTIFICATE: 15,
    ProbeId.THREAT_LIST: 30,
    ProbeId.DNS_RECORDS: 10,
    ProbeId.WHOIS: 10,
    ProbeId.REPUTATION: 10,
})

DARKWEB_WEIGHTS = _table(Kind.DARKWEB, {
    ProbeId.MARKETPLACE_MATCH: 35,
    ProbeId.TLD_RISK: 15,
    ProbeId.PHISHING_PATTERN: 20,
    ProbeId.THREAT_CROSS_REFERENCE: 30,
})

SOCIAL_WEIGHTS = _table(Kind.SOCIAL, {
    ProbeId.FOLLOWER_RATIO: 35,
    ProbeId.ENGAGEMENT: 30,
    ProbeId.ACCOUNT_AGE: 20,
    ProbeId.VERIFICATION: 15,
})

DROPSHIP_WEIGHTS = _table(Kind.DROPSHIP, {
    ProbeId.SHOPIFY_PLATFORM: 20,
    ProbeId.MARKUP: 30,
    ProbeId.TITLE_PATTERNS: 21,
    ProbeId.STORE_DOMAIN: 10,
})

RUGPULL_WEIGHTS = _table(Kind.RUGPULL, {
    ProbeId.HONEYPOT_SIMULATION: 70,
    ProbeId.ADDRESS_PATTERN: 10,
})

AD_TRANSPARENCY_WEIGHTS = _table(Kind.AD_TRANSPARENCY, {
    ProbeId.FUNNEL_BIO: 40,
    ProbeId.GURU_FOLLOWER_RANGE: 15,
    ProbeId.AD_PLATFORM: 10,
    ProbeId.GURU_CATEGORY: 25,
})

EMAIL_WEIGHTS = _table(Kind.EMAIL, {
    ProbeId.MAIL_DNS: 50,
    ProbeId.DISPOSABLE: 40,
    ProbeId.TYPO: 20,
    ProbeId.LOCAL_PART: 15,
    ProbeId.ROLE_ACCOUNT: 10,
    ProbeId.MAIL_AUTH: 10,
    ProbeId.FREE_PROVIDER: 3,
})

SUPPLIER_WEIGHTS = _table(Kind.SUPPLIER, {
    ProbeId.REGISTRATION: 30,
    ProbeId.REVIEWS: 25,
    ProbeId.DOMAIN_AUTHENTICITY: 25,
    ProbeId.CONTACT: 20,
})

ENGAGEMENT_AUDIT_WEIGHTS = _table(Kind.ENGAGEMENT_AUDIT, {
    ProbeId.FOLLOWER_QUALITY: 70,
    ProbeId.GROWTH_PATTERN: 15,
    ProbeId.PLATFORM: 15,
})

TRADING_SHIELD_WEIGHTS = _table(Kind.TRADING_SHIELD, {
    ProbeId.SSL_SECURITY: 10,
    ProbeId.DOMAIN_MATURITY: 10,
    ProbeId.THREAT_DATABASE: 10,
    ProbeId.EXCHANGE_VERIFICATION: 10,
    ProbeId.CLONE_DETECTION: 10,
    ProbeId.REGISTRATION_QUALITY: 10,
})

WEIGHT_TABLES = MappingProxyType({
    Kind.URL: URL_WEIGHTS,
    Kind.DARKWEB: DARKWEB_WEIGHTS,
    Kind.SOCIAL: SOCIAL_WEIGHTS,
    Kind.DROPSHIP: DROPSHIP_WEIGHTS,
    Kind.RUGPULL: RUGPULL_WEIGHTS,
    Kind.AD_TRANSPARENCY: AD_TRANSPARENCY_WEIGHTS,
    Kind.EMAIL: EMAIL_WEIGHTS,
    Kind.SUPPLIER: SUPPLIER_WEIGHTS,
    Kind.ENGAGEMENT_AUDIT: ENGAGEMENT_AUDIT_WEIGHTS,
    Kind.TRADING_SHIELD: TRADING_SHIELD_WEIGHTS,
})
