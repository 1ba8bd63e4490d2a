"""
Async DNS resolution (dnspython).

"No such record" is an answer (empty list), resolver trouble is a
DnsLookupError so probes can tell the two apart.
"""
import logging
from typing import List, Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from ..config import DNS_TIMEOUT
from ..domain.errors import DnsLookupError

logger = logging.getLogger(__name__)


class DnsClient:
    """Thin wrapper over dns.asyncresolver.Resolver."""

    def __init__(self, timeout: float = DNS_TIMEOUT, resolver: Optional[dns.asyncresolver.Resolver] = None):
        self.timeout = timeout
        self._resolver = resolver

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            try:
                self._resolver = dns.asyncresolver.Resolver()
            except dns.exception.DNSException as e:
                raise DnsLookupError(f"resolver unavailable: {type(e).__name__}") from e
        return self._resolver

    async def resolve(self, name: str, rdtype: str) -> List[str]:
        """
        Resolve one record type.

        Returns:
            Record values as text (TXT strings joined, trailing dots stripped).
            Empty list for NXDOMAIN / no answer.

        Raises:
            DnsLookupError: timeout, no nameservers, malformed name...
        """
        resolver = self._get_resolver()
        try:
            answers = await resolver.resolve(name, rdtype, lifetime=self.timeout)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return []
        except dns.exception.DNSException as e:
            logger.debug(f"DNS {rdtype} {name} failed: {type(e).__name__}: {e}")
            raise DnsLookupError(f"{rdtype} lookup for {name} failed: {type(e).__name__}") from e

        if rdtype == "TXT":
            return ["".join(part.decode(errors="replace") for part in answer.strings) for answer in answers]
        return [answer.to_text().rstrip(".") for answer in answers]
