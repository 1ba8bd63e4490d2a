"""
Artifact kinds and the closed set of probe identifiers.
"""
from enum import Enum


class Kind(Enum):
    """Artifact kind a score request is about."""
    URL = "url"
    DARKWEB = "darkweb"
    SOCIAL = "social"
    DROPSHIP = "dropship"
    RUGPULL = "rugpull"
    AD_TRANSPARENCY = "ad-transparency"
    EMAIL = "email"
    SUPPLIER = "supplier"
    ENGAGEMENT_AUDIT = "engagement-audit"
    TRADING_SHIELD = "trading-shield"


class ProbeId(Enum):
    """Every probe known to the system."""
    # url
    DOMAIN_AGE = "domain_age"
    TLS_CERTIFICATE = "tls_certificate"
    THREAT_LIST = "threat_list"
    DNS_RECORDS = "dns_records"
    WHOIS = "whois"
    REPUTATION = "reputation"
    # darkweb
    MARKETPLACE_MATCH = "marketplace_match"
    TLD_RISK = "tld_risk"
    PHISHING_PATTERN = "phishing_pattern"
    THREAT_CROSS_REFERENCE = "threat_cross_reference"
    # social
    FOLLOWER_RATIO = "follower_ratio"
    ENGAGEMENT = "engagement"
    ACCOUNT_AGE = "account_age"
    VERIFICATION = "verification"
    # dropship
    SHOPIFY_PLATFORM = "shopify_platform"
    MARKUP = "markup"
    TITLE_PATTERNS = "title_patterns"
    STORE_DOMAIN = "store_domain"
    # rugpull
    HONEYPOT_SIMULATION = "honeypot_simulation"
    ADDRESS_PATTERN = "address_pattern"
    # ad-transparency
    FUNNEL_BIO = "funnel_bio"
    GURU_FOLLOWER_RANGE = "guru_follower_range"
    AD_PLATFORM = "ad_platform"
    GURU_CATEGORY = "guru_category"
    # email
    MAIL_DNS = "mail_dns"
    DISPOSABLE = "disposable"
    TYPO = "typo"
    ROLE_ACCOUNT = "role_account"
    LOCAL_PART = "local_part"
    MAIL_AUTH = "mail_auth"
    FREE_PROVIDER = "free_provider"
    # supplier
    REGISTRATION = "registration"
    REVIEWS = "reviews"
    DOMAIN_AUTHENTICITY = "domain_authenticity"
    CONTACT = "contact"
    # engagement-audit
    PLATFORM = "platform"
    FOLLOWER_QUALITY = "follower_quality"
    GROWTH_PATTERN = "growth_pattern"
    # trading-shield
    SSL_SECURITY = "ssl_security"
    DOMAIN_MATURITY = "domain_maturity"
    THREAT_DATABASE = "threat_database"
    EXCHANGE_VERIFICATION = "exchange_verification"
    CLONE_DETECTION = "clone_detection"
    REGISTRATION_QUALITY = "registration_quality"


KIND_PROBES = {
    Kind.URL: frozenset({
        ProbeId.DOMAIN_AGE, ProbeId.TLS_CERTIFICATE, ProbeId.THREAT_LIST,
        ProbeId.DNS_RECORDS, ProbeId.WHOIS, ProbeId.REPUTATION,
    }),
    Kind.DARKWEB: frozenset({
        ProbeId.MARKETPLACE_MATCH, ProbeId.TLD_RISK,
        ProbeId.PHISHING_PATTERN, ProbeId.THREAT_CROSS_REFERENCE,
    }),
    Kind.SOCIAL: frozenset({
        ProbeId.FOLLOWER_RATIO, ProbeId.ENGAGEMENT,
        ProbeId.ACCOUNT_AGE, ProbeId.VERIFICATION,
    }),
    Kind.DROPSHIP: frozenset({
        ProbeId.SHOPIFY_PLATFORM, ProbeId.MARKUP,
        ProbeId.TITLE_PATTERNS, ProbeId.STORE_DOMAIN,
    }),
    Kind.RUGPULL: frozenset({
        ProbeId.HONEYPOT_SIMULATION, ProbeId.ADDRESS_PATTERN,
    }),
    Kind.AD_TRANSPARENCY: frozenset({
        ProbeId.FUNNEL_BIO, ProbeId.GURU_FOLLOWER_RANGE,
        ProbeId.AD_PLATFORM, ProbeId.GURU_CATEGORY,
    }),
    Kind.EMAIL: frozenset({
        ProbeId.MAIL_DNS, ProbeId.DISPOSABLE, ProbeId.TYPO, ProbeId.ROLE_ACCOUNT,
        ProbeId.LOCAL_PART, ProbeId.MAIL_AUTH, ProbeId.FREE_PROVIDER,
    }),
    Kind.SUPPLIER: frozenset({
        ProbeId.REGISTRATION, ProbeId.REVIEWS,
        ProbeId.DOMAIN_AUTHENTICITY, ProbeId.CONTACT,
    }),
    Kind.ENGAGEMENT_AUDIT: frozenset({
        ProbeId.PLATFORM, ProbeId.FOLLOWER_QUALITY, ProbeId.GROWTH_PATTERN,
    }),
    Kind.TRADING_SHIELD: frozenset({
        ProbeId.SSL_SECURITY, ProbeId.DOMAIN_MATURITY, ProbeId.THREAT_DATABASE,
        ProbeId.EXCHANGE_VERIFICATION, ProbeId.CLONE_DETECTION, ProbeId.REGISTRATION_QUALITY,
    }),
}
