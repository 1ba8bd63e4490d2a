"""Infrastructure layer - DNS, HTTP and TLS collaborators."""
from .dns_client import DnsClient
from .http_client import JsonHttpClient
from .tls import CertificateFetcher, CertificateInfo

__all__ = ['DnsClient', 'JsonHttpClient', 'CertificateFetcher', 'CertificateInfo']
