"""
Peer certificate fetcher.

Opens a verified TLS connection with asyncio and reads the peer
certificate. A certificate the default context rejects is reported as an
answer (verified=False), not as an error: an untrusted certificate is a
signal. Only transport trouble (DNS, unreachable, handshake timeout)
raises CertificateFetchError.
"""
import asyncio
import contextlib
import logging
import ssl
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..config import TLS_TIMEOUT
from ..domain.errors import CertificateFetchError

logger = logging.getLogger(__name__)

CERT_TIME_FORMAT = "%b %d %H:%M:%S %Y %Z"


@dataclass(frozen=True)
class CertificateInfo:
    verified: bool
    not_before: Optional[datetime] = None
    not_after: Optional[datetime] = None
    issuer: Optional[str] = None
    subject: Optional[str] = None
    error: Optional[str] = None


def parse_cert_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.strptime(value, CERT_TIME_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        logger.debug(f"Unparseable certificate time: {value!r}")
        return None


def _rdn_field(rdns, name: str) -> Optional[str]:
    for rdn in rdns or ():
        for key, value in rdn:
            if key == name:
                return value
    return None


class CertificateFetcher:
    def __init__(self, timeout: float = TLS_TIMEOUT, port: int = 443):
        self.timeout = timeout
        self.port = port

    async def fetch(self, host: str) -> CertificateInfo:
        """
        Handshake with host:port and return its certificate.

        Raises:
            CertificateFetchError: host unreachable or handshake timed out
        """
        context = ssl.create_default_context()
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, self.port, ssl=context, server_hostname=host),
                timeout=self.timeout,
            )
        except ssl.SSLCertVerificationError as e:
            return CertificateInfo(verified=False, error=e.verify_message or str(e))
        except ssl.SSLError as e:
            return CertificateInfo(verified=False, error=f"TLS handshake failed: {e.reason or e}")
        except ConnectionRefusedError:
            return CertificateInfo(verified=False, error="Connection refused on port 443 (no HTTPS)")
        except asyncio.TimeoutError as e:
            raise CertificateFetchError(f"TLS handshake timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise CertificateFetchError(f"{type(e).__name__}: {e}") from e

        try:
            ssl_object = writer.get_extra_info("ssl_object")
            cert = ssl_object.getpeercert() if ssl_object else None
        finally:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()

        if not cert:
            return CertificateInfo(verified=False, error="No certificate presented")

        return CertificateInfo(
            verified=True,
            not_before=parse_cert_time(cert.get("notBefore")),
            not_after=parse_cert_time(cert.get("notAfter")),
            issuer=_rdn_field(cert.get("issuer"), "organizationName") or _rdn_field(cert.get("issuer"), "commonName"),
            subject=_rdn_field(cert.get("subject"), "commonName"),
        )
