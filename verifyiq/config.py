"""
VerifyIQ configuration.

All constants live here for central management.
Override any of them through environment variables (or a .env file).

Usage:
    from verifyiq.config import WHOIS_API_KEY, PROBE_TIMEOUT
    from verifyiq.config import ScanConfig
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


# =============================================================================
# THIRD-PARTY API KEYS (optional, absent key => heuristic fallback)
# =============================================================================

WHOIS_API_KEY = os.getenv("WHOIS_API_KEY", "")
SAFE_BROWSING_KEY = os.getenv("SAFE_BROWSING_KEY", "")
IPQS_KEY = os.getenv("IPQS_KEY", "")


# =============================================================================
# PROVIDER ENDPOINTS
# =============================================================================

WHOIS_API_URL = os.getenv("WHOIS_API_URL", "https://www.whoisxmlapi.com/whoisserver/WhoisService")
SAFE_BROWSING_URL = os.getenv("SAFE_BROWSING_URL", "https://safebrowsing.googleapis.com/v4/threatMatches:find")
IPQS_URL = os.getenv("IPQS_URL", "https://ipqualityscore.com/api/json/url")
HONEYPOT_API_URL = os.getenv("HONEYPOT_API_URL", "https://api.honeypot.is/v2/IsHoneypot")

USER_AGENT = os.getenv("USER_AGENT", "VerifyIQ/2.0")
SAFE_BROWSING_CLIENT_ID = "verifyiq"
SAFE_BROWSING_CLIENT_VERSION = "2.0.0"


# =============================================================================
# TIMEOUTS (seconds)
# =============================================================================

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "8"))
DNS_TIMEOUT = float(os.getenv("DNS_TIMEOUT", "5"))
TLS_TIMEOUT = float(os.getenv("TLS_TIMEOUT", "5"))

# Per-probe scheduler timeouts. Must exceed the inner I/O timeouts above
# so a provider failure still leaves time for the fallback strategy.
PROBE_TIMEOUT = float(os.getenv("PROBE_TIMEOUT", "10"))
NETWORK_PROBE_TIMEOUT = float(os.getenv("NETWORK_PROBE_TIMEOUT", "12"))
CROSS_REFERENCE_TIMEOUT = float(os.getenv("CROSS_REFERENCE_TIMEOUT", "25"))


# =============================================================================
# LIMITS
# =============================================================================

BULK_SCAN_LIMIT = int(os.getenv("BULK_SCAN_LIMIT", "50"))
BULK_EMAIL_LIMIT = int(os.getenv("BULK_EMAIL_LIMIT", "100"))


# =============================================================================
# SERVER / LOGGING
# =============================================================================

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list of allowed browser origins (extension, landing page)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


@dataclass(frozen=True)
class ScanConfig:
    """
    Read-only configuration handed to probes and services.

    Defaults come from the module constants; tests and embedding code pass
    their own instance instead of mutating globals.
    """
    whois_api_key: str = WHOIS_API_KEY
    safe_browsing_key: str = SAFE_BROWSING_KEY
    ipqs_key: str = IPQS_KEY

    whois_api_url: str = WHOIS_API_URL
    safe_browsing_url: str = SAFE_BROWSING_URL
    ipqs_url: str = IPQS_URL
    honeypot_api_url: str = HONEYPOT_API_URL
    user_agent: str = USER_AGENT

    http_timeout: float = HTTP_TIMEOUT
    dns_timeout: float = DNS_TIMEOUT
    tls_timeout: float = TLS_TIMEOUT
    probe_timeout: float = PROBE_TIMEOUT
    network_probe_timeout: float = NETWORK_PROBE_TIMEOUT
    cross_reference_timeout: float = CROSS_REFERENCE_TIMEOUT

    bulk_scan_limit: int = BULK_SCAN_LIMIT
    bulk_email_limit: int = BULK_EMAIL_LIMIT
