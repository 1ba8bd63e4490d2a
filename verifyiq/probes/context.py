"""
Collaborators shared by the probes of one service.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config import ScanConfig
from ..infrastructure import CertificateFetcher, DnsClient, JsonHttpClient


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScanContext:
    config: ScanConfig
    dns: DnsClient
    http: JsonHttpClient
    certificates: CertificateFetcher
    clock: Callable[[], datetime] = field(default=utcnow, compare=False)

    def now(self) -> datetime:
        return self.clock()

    @classmethod
    def default(cls, config: Optional[ScanConfig] = None) -> "ScanContext":
        """Real network clients configured from ScanConfig."""
        config = config or ScanConfig()
        return cls(
            config=config,
            dns=DnsClient(timeout=config.dns_timeout),
            http=JsonHttpClient(timeout=config.http_timeout, user_agent=config.user_agent),
            certificates=CertificateFetcher(timeout=config.tls_timeout),
        )
