"""
Score subjects and central validation.

validate() is the only place that turns a raw payload (JSON body, CLI args)
into a ScoreRequest. Everything downstream can rely on the subject being
well-formed; anything malformed raises StructuralError here.
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit

import idna

from ..blocklists import CHAIN_IDS, DEFAULT_CHAIN_ID, SECOND_LEVEL_LABELS
from .errors import StructuralError
from .kinds import Kind

ADDRESS_RE = re.compile(r'^0x[a-fA-F0-9]{40}$')
EMAIL_LOCAL_RE = re.compile(r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+$")
EMAIL_DOMAIN_RE = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?)*\.[a-zA-Z]{2,}$"
)


# =============================================================================
# SUBJECTS
# =============================================================================

@dataclass(frozen=True)
class UrlSubject:
    """Normalised http(s) URL."""
    url: str
    scheme: str
    host: str              # lower-case, IDNA (punycode) encoded
    root_domain: str       # registrable part: example.com, example.co.uk

    @property
    def tld(self) -> str:
        return "." + self.host.rsplit(".", 1)[-1] if "." in self.host else ""

    @property
    def subdomain_count(self) -> int:
        return max(0, self.host.count(".") - self.root_domain.count("."))


@dataclass(frozen=True)
class SocialProfile:
    followers: int
    following: int = 0
    avg_likes: Optional[float] = None
    is_verified: bool = False
    creation_date: Optional[datetime] = None


@dataclass(frozen=True)
class ProductListing:
    title: str
    price: Optional[float] = None
    currency: str = "USD"
    image_url: Optional[str] = None
    store_url: Optional[str] = None


@dataclass(frozen=True)
class ContractSubject:
    address: str           # lower-case 0x + 40 hex
    chain: str = "ethereum"

    @property
    def chain_id(self) -> int:
        return CHAIN_IDS.get(self.chain, DEFAULT_CHAIN_ID)


@dataclass(frozen=True)
class AdvertiserProfile:
    username: str
    platform: str = "unknown"
    bio: str = ""
    followers: int = 0


@dataclass(frozen=True)
class EmailAddress:
    address: str           # lower-case
    local_part: str
    domain: str


Subject = Union[UrlSubject, SocialProfile, ProductListing, ContractSubject, AdvertiserProfile, EmailAddress]


@dataclass(frozen=True)
class ScoreRequest:
    kind: Kind
    subject: Subject


# =============================================================================
# FIELD HELPERS
# =============================================================================

def root_domain(host: str) -> str:
    """
    Registrable domain of a host.

    sub.example.com -> example.com
    shop.example.co.uk -> example.co.uk
    """
    labels = host.split(".")
    if len(labels) <= 2 or all(label.isdigit() for label in labels):
        return host
    if labels[-2] in SECOND_LEVEL_LABELS and len(labels[-1]) == 2:
        return ".".join(labels[-3:])
    return ".".join(labels[-2:])


def parse_url(raw: Any, assume_https: bool = False) -> UrlSubject:
    """
    Parse and normalise a URL.

    Args:
        raw: User supplied URL
        assume_https: Prepend https:// when the scheme is missing

    Raises:
        StructuralError: not a string, not http(s), or no valid host
    """
    if not isinstance(raw, str) or not raw.strip():
        raise StructuralError("Invalid URL format: URL must be a non-empty string")
    text = raw.strip()
    if assume_https and "://" not in text:
        text = "https://" + text

    try:
        parts = urlsplit(text)
        hostname = parts.hostname
    except ValueError as e:
        raise StructuralError(f"Invalid URL format: {e}") from e

    scheme = parts.scheme.lower()
    if scheme not in ("http", "https"):
        raise StructuralError(f"Invalid URL format: unsupported scheme {scheme or '(none)'!r}")
    if not hostname:
        raise StructuralError("Invalid URL format: missing host")

    host = hostname.rstrip(".").lower()
    if not host.isascii():
        try:
            host = idna.encode(host, uts46=True).decode("ascii")
        except idna.IDNAError as e:
            raise StructuralError(f"Invalid URL format: bad internationalised host ({e})") from e
    if not host or ".." in host or " " in host:
        raise StructuralError(f"Invalid URL format: bad host {hostname!r}")

    return UrlSubject(url=text, scheme=scheme, host=host, root_domain=root_domain(host))


def parse_email(raw: Any) -> EmailAddress:
    """
    Syntax check and normalise an email address.

    Raises:
        StructuralError: the address cannot be delivered to by construction
    """
    if not isinstance(raw, str) or not raw.strip():
        raise StructuralError("Invalid email: empty email provided")
    address = raw.strip().lower()
    if len(address) > 254:
        raise StructuralError("Invalid email: exceeds maximum length of 254 characters")

    parts = address.split("@")
    if len(parts) != 2:
        raise StructuralError("Invalid email: must contain exactly one @ symbol")
    local, domain = parts
    if not 1 <= len(local) <= 64:
        raise StructuralError("Invalid email: local part must be between 1 and 64 characters")
    if not 1 <= len(domain) <= 253:
        raise StructuralError("Invalid email: domain must be between 1 and 253 characters")
    if not EMAIL_LOCAL_RE.match(local):
        raise StructuralError("Invalid email: local part contains invalid characters")
    if local.startswith(".") or local.endswith(".") or ".." in local:
        raise StructuralError("Invalid email: local part has invalid dot placement")
    if not EMAIL_DOMAIN_RE.match(domain):
        raise StructuralError("Invalid email: domain format is invalid")

    return EmailAddress(address=address, local_part=local, domain=domain)


def parse_timestamp(raw: Any) -> datetime:
    """
    Parse an ISO-8601 date/datetime into an aware UTC datetime.

    Accepts trailing 'Z' and '+0000' style offsets.
    """
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, str) and raw.strip():
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        elif re.search(r'[+-]\d{4}$', text):
            text = text[:-2] + ":" + text[-2:]
        try:
            value = datetime.fromisoformat(text)
        except ValueError as e:
            raise StructuralError(f"Invalid date: {raw!r}") from e
    else:
        raise StructuralError(f"Invalid date: {raw!r}")

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _count(payload: Mapping[str, Any], name: str, required: bool = False, default: float = 0) -> float:
    value = payload.get(name)
    if value is None:
        if required:
            raise StructuralError(f"Missing required field: {name}")
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StructuralError(f"Field {name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise StructuralError(f"Field {name} must be a non-negative number, got {value}")
    return value


def _text(payload: Mapping[str, Any], name: str, required: bool = False, default: str = "") -> str:
    value = payload.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise StructuralError(f"Missing required field: {name}")
        return default
    if not isinstance(value, str):
        raise StructuralError(f"Field {name} must be a string, got {type(value).__name__}")
    return value.strip()


# =============================================================================
# PER-KIND VALIDATION
# =============================================================================

def _url(payload):
    return parse_url(payload.get("url"))


def _bare_url(payload):
    return parse_url(payload.get("url"), assume_https=True)


def _social(payload):
    creation = payload.get("creation_date")
    likes = payload.get("avg_likes")
    return SocialProfile(
        followers=int(_count(payload, "followers", required=True)),
        following=int(_count(payload, "following")),
        avg_likes=float(_count(payload, "avg_likes")) if likes is not None else None,
        is_verified=bool(payload.get("is_verified", False)),
        creation_date=parse_timestamp(creation) if creation else None,
    )


def _dropship(payload):
    price = payload.get("price")
    store_url = _text(payload, "store_url") or None
    if store_url is not None:
        # validated for shape only, the original string is kept for display
        parse_url(store_url, assume_https=True)
    return ProductListing(
        title=_text(payload, "product_title", required=True),
        price=float(_count(payload, "price")) if price is not None else None,
        currency=_text(payload, "currency", default="USD").upper(),
        image_url=_text(payload, "image_url") or None,
        store_url=store_url,
    )


def _rugpull(payload):
    address = _text(payload, "address", required=True)
    if not ADDRESS_RE.match(address):
        raise StructuralError("Invalid address format: expected 0x followed by 40 hex characters")
    chain = _text(payload, "chain", default="ethereum").lower()
    return ContractSubject(address=address.lower(), chain=chain)


def _ads(payload):
    return AdvertiserProfile(
        username=_text(payload, "username", required=True).lstrip("@"),
        platform=_text(payload, "platform", default="unknown").lower(),
        bio=_text(payload, "bio"),
        followers=int(_count(payload, "followers")),
    )


def _email(payload):
    return parse_email(payload.get("email"))


_VALIDATORS = {
    Kind.URL: _url,
    Kind.DARKWEB: _bare_url,
    Kind.SOCIAL: _social,
    Kind.DROPSHIP: _dropship,
    Kind.RUGPULL: _rugpull,
    Kind.AD_TRANSPARENCY: _ads,
    Kind.EMAIL: _email,
    Kind.SUPPLIER: _url,
    Kind.ENGAGEMENT_AUDIT: _bare_url,
    Kind.TRADING_SHIELD: _url,
}


def validate(kind: Kind, payload: Mapping[str, Any]) -> ScoreRequest:
    """
    Build a ScoreRequest from a raw payload.

    Raises:
        StructuralError: payload is not a mapping or the subject is malformed
    """
    if not isinstance(payload, Mapping):
        raise StructuralError(f"Request body must be an object, got {type(payload).__name__}")
    subject = _VALIDATORS[kind](payload)
    return ScoreRequest(kind=kind, subject=subject)
