"""
Email address probes.

Five pure checks on the address text plus two DNS checks on its domain
(mail exchangers and SPF/DMARC).
"""
import asyncio
import logging
from typing import List, Optional

from ..blocklists import (
    CONSONANT_RUN,
    DISPOSABLE_DOMAINS,
    DOMAIN_TYPOS,
    FREE_EMAIL_PROVIDERS,
    KEYBOARD_PATTERNS,
    ROLE_PREFIXES,
)
from ..domain.errors import DnsLookupError, ProbeError
from ..domain.kinds import ProbeId
from ..domain.subjects import EmailAddress
from .base import Probe
from .context import ScanContext

logger = logging.getLogger(__name__)


def local_part_issues(local: str) -> List[str]:
    """Signs that a local part was generated rather than chosen by a person."""
    issues = []
    digits = sum(ch.isdigit() for ch in local)
    if digits / len(local) > 0.6:
        issues.append("Excessive numbers in local part")
    if len(local) <= 2:
        issues.append("Very short local part")
    if CONSONANT_RUN.search(local):
        issues.append("Appears to be randomly generated")
    if any(pattern in local for pattern in KEYBOARD_PATTERNS):
        issues.append("Contains keyboard pattern")
    return issues


def role_prefix(local: str) -> Optional[str]:
    """Role mailbox name the local part starts with, if any."""
    if local in ROLE_PREFIXES:
        return local
    for separator in ".+_-":
        head = local.split(separator, 1)[0]
        if head in ROLE_PREFIXES:
            return head
    return None


class DisposableProbe(Probe):
    probe_id = ProbeId.DISPOSABLE

    async def probe(self, subject: EmailAddress):
        if subject.domain in DISPOSABLE_DOMAINS:
            return self.ok(0.0, "Disposable/temporary email service", penalty=True)
        return self.ok(1.0, "Not a known disposable email service")


class TypoProbe(Probe):
    probe_id = ProbeId.TYPO

    async def probe(self, subject: EmailAddress):
        suggested = DOMAIN_TYPOS.get(subject.domain)
        if suggested:
            return self.ok(0.0, f"Possible typo, did you mean @{suggested}?", penalty=True,
                           suggested_domain=suggested)
        return self.ok(1.0, "No common domain typo")


class RoleAccountProbe(Probe):
    probe_id = ProbeId.ROLE_ACCOUNT

    async def probe(self, subject: EmailAddress):
        prefix = role_prefix(subject.local_part)
        if prefix:
            return self.ok(0.0, f"\"{prefix}\" is a role-based address, not a personal inbox",
                           penalty=True, prefix=prefix)
        return self.ok(1.0, "Appears to be a personal address")


class LocalPartProbe(Probe):
    probe_id = ProbeId.LOCAL_PART

    async def probe(self, subject: EmailAddress):
        issues = local_part_issues(subject.local_part)
        if issues:
            return self.ok(0.0, "Suspicious local part format", penalty=True, issues=issues)
        return self.ok(1.0, "Local part appears normal", issues=[])


class FreeProviderProbe(Probe):
    """Slight penalty: free mailboxes say little about a business sender."""
    probe_id = ProbeId.FREE_PROVIDER

    async def probe(self, subject: EmailAddress):
        if subject.domain in FREE_EMAIL_PROVIDERS:
            return self.ok(0.0, "Free email provider", is_free=True)
        return self.ok(1.0, "Custom/business domain", is_free=False)


class _DnsProbe(Probe):
    def __init__(self, ctx: ScanContext):
        self.ctx = ctx
        self.timeout = ctx.config.network_probe_timeout

    async def _lookup(self, name: str, rdtype: str) -> Optional[List[str]]:
        try:
            return await self.ctx.dns.resolve(name, rdtype)
        except DnsLookupError as e:
            logger.debug(f"{rdtype} {name}: {e}")
            return None


class MailDnsProbe(_DnsProbe):
    """
    MX records, with an A record as the implicit mail exchanger.

    Both lookups erroring is unavailability, both answering empty is a
    domain that cannot receive mail.
    """
    probe_id = ProbeId.MAIL_DNS

    async def probe(self, subject: EmailAddress):
        mx, a = await asyncio.gather(self._lookup(subject.domain, "MX"), self._lookup(subject.domain, "A"))
        if mx is None and a is None:
            raise ProbeError(f"MX and A lookups failed for {subject.domain}")
        mx, a = mx or [], a or []
        detail = dict(has_mx=bool(mx), has_a=bool(a), mx_records=mx[:5])
        if mx:
            return self.ok(1.0, f"Domain has valid mail configuration ({len(mx)} MX records)", **detail)
        if a:
            return self.ok(1.0, "No MX records, A record accepts mail", **detail)
        return self.ok(0.0, "No mail server found for domain", penalty=True, **detail)


class MailAuthProbe(_DnsProbe):
    """SPF + DMARC -> 1.0, SPF only -> 0.5, neither -> 0.0"""
    probe_id = ProbeId.MAIL_AUTH

    async def probe(self, subject: EmailAddress):
        txt, dmarc = await asyncio.gather(
            self._lookup(subject.domain, "TXT"),
            self._lookup(f"_dmarc.{subject.domain}", "TXT"),
        )
        if txt is None and dmarc is None:
            raise ProbeError(f"TXT lookups failed for {subject.domain}")
        has_spf = any(t.lower().startswith("v=spf1") for t in txt or [])
        has_dmarc = any(t.lower().startswith("v=dmarc1") for t in dmarc or [])
        detail = dict(has_spf=has_spf, has_dmarc=has_dmarc)
        if has_spf and has_dmarc:
            return self.ok(1.0, "Proper email authentication (SPF + DMARC)", **detail)
        if has_spf:
            return self.ok(0.5, "SPF present, DMARC missing", **detail)
        return self.ok(0.0, "Domain lacks SPF authentication", penalty=True, **detail)


def build_email_probes(ctx: ScanContext) -> List[Probe]:
    return [
        MailDnsProbe(ctx),
        DisposableProbe(),
        TypoProbe(),
        RoleAccountProbe(),
        LocalPartProbe(),
        MailAuthProbe(ctx),
        FreeProviderProbe(),
    ]
