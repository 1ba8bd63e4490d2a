"""
Domain layer: pure scoring logic, no I/O.
"""
from .aggregator import aggregate
from .envelope import ResultEnvelope
from .errors import (
    CertificateFetchError,
    DnsLookupError,
    HttpError,
    ProbeError,
    StructuralError,
    WeightTableError,
)
from .kinds import KIND_PROBES, Kind, ProbeId
from .outcome import ProbeOutcome, ProbeStatus
from .subjects import (
    AdvertiserProfile,
    ContractSubject,
    EmailAddress,
    ProductListing,
    ScoreRequest,
    SocialProfile,
    UrlSubject,
    validate,
)
from .verdict import (
    AdVerdict,
    DarkWebVerdict,
    DropshipVerdict,
    EmailVerdict,
    EngagementVerdict,
    RugPullVerdict,
    SocialVerdict,
    SupplierVerdict,
    TradingVerdict,
    UrlVerdict,
    Verdict,
    classify,
    get_verdict_color,
    worst_verdict,
)
from .weights import WEIGHT_TABLES, ProbeWeight, WeightTable

__all__ = [
    'aggregate',
    'ResultEnvelope',
    'CertificateFetchError', 'DnsLookupError', 'HttpError', 'ProbeError',
    'StructuralError', 'WeightTableError',
    'KIND_PROBES', 'Kind', 'ProbeId',
    'ProbeOutcome', 'ProbeStatus',
    'AdvertiserProfile', 'ContractSubject', 'ProductListing', 'ScoreRequest',
    'SocialProfile', 'UrlSubject', 'EmailAddress', 'validate',
    'AdVerdict', 'DarkWebVerdict', 'DropshipVerdict', 'EmailVerdict', 'EngagementVerdict',
    'RugPullVerdict', 'SocialVerdict', 'SupplierVerdict', 'TradingVerdict', 'UrlVerdict', 'Verdict',
    'classify', 'get_verdict_color', 'worst_verdict',
    'WEIGHT_TABLES', 'ProbeWeight', 'WeightTable',
]
