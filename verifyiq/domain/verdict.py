"""
Verdict Determination
Per-kind thresholds and verdict assignment.
"""
from enum import Enum
from typing import Dict, Tuple, Type

from .kinds import Kind


class Verdict(Enum):
    """Base for per-kind verdicts. Declaration order = rank, best first."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)


class UrlVerdict(Verdict):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


class DarkWebVerdict(Verdict):
    CLEAN = "clean"
    ELEVATED = "elevated"
    HIGH = "high"


class SocialVerdict(Verdict):
    AUTHENTIC = "authentic"
    PLAUSIBLE = "plausible"
    SUSPICIOUS = "suspicious"
    BOT_FAKE = "bot-fake"


class DropshipVerdict(Verdict):
    LOW_INDICATORS = "low_indicators"
    POSSIBLE_DROPSHIP = "possible_dropship"
    LIKELY_DROPSHIP = "likely_dropship"


class RugPullVerdict(Verdict):
    SAFE = "safe"
    CAUTION = "caution"
    HIGH_RISK = "high_risk"
    DANGEROUS = "dangerous"
    # Never derived from a score: honeypot simulation unavailable
    UNKNOWN = "unknown"


class AdVerdict(Verdict):
    NO_INDICATORS = "no_indicators"
    PROMOTIONAL = "promotional"
    ACTIVE_ADS = "active_ads"
    HEAVY_ADS = "heavy_ads"


class EmailVerdict(Verdict):
    DELIVERABLE = "deliverable"
    RISKY = "risky"
    UNDELIVERABLE = "undeliverable"


class SupplierVerdict(Verdict):
    LEGITIMATE = "legitimate"
    CAUTION = "caution"
    HIGH_RISK = "high_risk"


class EngagementVerdict(Verdict):
    AUTHENTIC = "authentic"
    MIXED = "mixed"
    INFLATED = "inflated"


class TradingVerdict(Verdict):
    """Risk level of a trading platform, lowest risk first."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# (minimum score, verdict), best tier first. Last tier catches everything below.
THRESHOLDS: Dict[Kind, Tuple[Tuple[int, Verdict], ...]] = {
    Kind.URL: (
        (75, UrlVerdict.SAFE),
        (50, UrlVerdict.SUSPICIOUS),
        (0, UrlVerdict.DANGEROUS),
    ),
    Kind.DARKWEB: (
        (75, DarkWebVerdict.CLEAN),
        (45, DarkWebVerdict.ELEVATED),
        (0, DarkWebVerdict.HIGH),
    ),
    Kind.SOCIAL: (
        (81, SocialVerdict.AUTHENTIC),
        (66, SocialVerdict.PLAUSIBLE),
        (51, SocialVerdict.SUSPICIOUS),
        (0, SocialVerdict.BOT_FAKE),
    ),
    Kind.DROPSHIP: (
        (61, DropshipVerdict.LOW_INDICATORS),
        (31, DropshipVerdict.POSSIBLE_DROPSHIP),
        (0, DropshipVerdict.LIKELY_DROPSHIP),
    ),
    Kind.RUGPULL: (
        (75, RugPullVerdict.SAFE),
        (50, RugPullVerdict.CAUTION),
        (25, RugPullVerdict.HIGH_RISK),
        (0, RugPullVerdict.DANGEROUS),
    ),
    Kind.AD_TRANSPARENCY: (
        (81, AdVerdict.NO_INDICATORS),
        (61, AdVerdict.PROMOTIONAL),
        (31, AdVerdict.ACTIVE_ADS),
        (0, AdVerdict.HEAVY_ADS),
    ),
    Kind.EMAIL: (
        (80, EmailVerdict.DELIVERABLE),
        (30, EmailVerdict.RISKY),
        (0, EmailVerdict.UNDELIVERABLE),
    ),
    Kind.SUPPLIER: (
        (70, SupplierVerdict.LEGITIMATE),
        (45, SupplierVerdict.CAUTION),
        (0, SupplierVerdict.HIGH_RISK),
    ),
    Kind.ENGAGEMENT_AUDIT: (
        (70, EngagementVerdict.AUTHENTIC),
        (40, EngagementVerdict.MIXED),
        (0, EngagementVerdict.INFLATED),
    ),
    # equal weights: 0-1 failed checks low, 2 medium, 3 high, 4+ critical
    Kind.TRADING_SHIELD: (
        (80, TradingVerdict.LOW),
        (60, TradingVerdict.MEDIUM),
        (45, TradingVerdict.HIGH),
        (0, TradingVerdict.CRITICAL),
    ),
}

VERDICT_TYPES: Dict[Kind, Type[Verdict]] = {
    Kind.URL: UrlVerdict,
    Kind.DARKWEB: DarkWebVerdict,
    Kind.SOCIAL: SocialVerdict,
    Kind.DROPSHIP: DropshipVerdict,
    Kind.RUGPULL: RugPullVerdict,
    Kind.AD_TRANSPARENCY: AdVerdict,
    Kind.EMAIL: EmailVerdict,
    Kind.SUPPLIER: SupplierVerdict,
    Kind.ENGAGEMENT_AUDIT: EngagementVerdict,
    Kind.TRADING_SHIELD: TradingVerdict,
}


def classify(score: int, kind: Kind) -> Verdict:
    """
    Determine verdict based on score.

    Args:
        score: Aggregate score (0-100)
        kind: Artifact kind

    Returns:
        Verdict of the kind's enum
    """
    if not 0 <= score <= 100:
        raise ValueError(f"score out of range: {score}")
    for minimum, verdict in THRESHOLDS[kind]:
        if score >= minimum:
            return verdict
    # unreachable: last tier has minimum 0
    return THRESHOLDS[kind][-1][1]


def worst_verdict(kind: Kind) -> Verdict:
    """Lowest threshold tier, used for structurally invalid requests."""
    return THRESHOLDS[kind][-1][1]


def get_verdict_color(verdict: Verdict) -> str:
    """
    Get ANSI color code for terminal output.

    Colour follows the tier position within the kind.
    """
    if verdict is RugPullVerdict.UNKNOWN:
        return "\033[90m"  # Grey
    tiers = [v for _, v in THRESHOLDS[_kind_of(verdict)]]
    position = tiers.index(verdict)
    if position == 0:
        return "\033[92m"  # Bright Green
    if position == len(tiers) - 1:
        return "\033[91m"  # Red
    return "\033[93m"      # Yellow


def _kind_of(verdict: Verdict) -> Kind:
    for kind, verdict_type in VERDICT_TYPES.items():
        if isinstance(verdict, verdict_type):
            return kind
    raise ValueError(f"unknown verdict type: {verdict!r}")
