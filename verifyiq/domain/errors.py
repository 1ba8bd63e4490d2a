"""
Error taxonomy.

StructuralError     - request is malformed, no probe runs
ProbeError          - a probe's data source failed, absorbed as a failed outcome
WeightTableError    - weight table misconfigured (programming error)
"""


class StructuralError(ValueError):
    """Subject failed validation (bad URL, bad address, missing field...)."""


class ProbeError(Exception):
    """A probe could not obtain its signal."""


class DnsLookupError(ProbeError):
    """Resolver failure other than a clean 'no such record'."""


class HttpError(ProbeError):
    """Transport failure, bad status or undecodable body from an HTTP provider."""


class CertificateFetchError(ProbeError):
    """TLS connection could not be set up for a reason other than a bad certificate."""


class WeightTableError(ValueError):
    """Weight table does not match the probe set of its kind."""
