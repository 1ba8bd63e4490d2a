"""
Tests for the email verifier.

Run:
    pytest tests/test_email.py -v
"""
import asyncio

import pytest

from conftest import FakeDns, healthy_dns, make_context
from verifyiq.analyzers.bulk import verify_emails
from verifyiq.analyzers.email import EmailVerifier, risk_level
from verifyiq.domain.errors import DnsLookupError, StructuralError
from verifyiq.domain.kinds import ProbeId
from verifyiq.domain.outcome import ProbeStatus
from verifyiq.domain.subjects import parse_email
from verifyiq.domain.verdict import EmailVerdict
from verifyiq.probes.email import (
    DisposableProbe,
    FreeProviderProbe,
    LocalPartProbe,
    MailAuthProbe,
    MailDnsProbe,
    RoleAccountProbe,
    TypoProbe,
    local_part_issues,
    role_prefix,
)


def run(probe, address):
    return asyncio.run(probe.run(parse_email(address)))


def verify(address, dns=None):
    return asyncio.run(EmailVerifier(make_context(dns=dns)).verify(address))


class TestAddressChecks:
    def test_disposable(self):
        outcome = run(DisposableProbe(), "jane@mailinator.com")
        assert outcome.credit == 0.0
        assert outcome.detail["penalty"] is True
        assert run(DisposableProbe(), "jane@example.com").credit == 1.0

    def test_typo_suggests_domain(self):
        outcome = run(TypoProbe(), "jane@gmial.com")
        assert outcome.credit == 0.0
        assert outcome.detail["suggested_domain"] == "gmail.com"
        assert run(TypoProbe(), "jane@gmail.com").credit == 1.0

    @pytest.mark.parametrize("local,expected", [
        ("info", "info"),
        ("sales.team", "sales"),
        ("noreply", "noreply"),
        ("support+tickets", "support"),
        ("jane-info", None),
        ("jane.doe", None),
    ])
    def test_role_prefix(self, local, expected):
        assert role_prefix(local) == expected

    def test_role_account(self):
        outcome = run(RoleAccountProbe(), "admin@example.com")
        assert outcome.credit == 0.0
        assert outcome.detail["prefix"] == "admin"

    @pytest.mark.parametrize("local,issue", [
        ("98765432", "Excessive numbers in local part"),
        ("ab", "Very short local part"),
        ("xkcdrtpq", "Appears to be randomly generated"),
        ("qwerty.jane", "Contains keyboard pattern"),
    ])
    def test_local_part_issues(self, local, issue):
        assert issue in local_part_issues(local)

    def test_dotted_name_is_not_random(self):
        assert local_part_issues("jane.doe") == []

    def test_local_part_probe(self):
        outcome = run(LocalPartProbe(), "12345@example.com")
        assert outcome.credit == 0.0
        assert "Contains keyboard pattern" in outcome.detail["issues"]

    def test_free_provider(self):
        outcome = run(FreeProviderProbe(), "jane@gmail.com")
        assert outcome.credit == 0.0
        assert outcome.detail["is_free"] is True
        assert "penalty" not in outcome.detail
        assert run(FreeProviderProbe(), "jane@acme.io").detail["is_free"] is False


class TestDnsChecks:
    def run_dns(self, probe_cls, dns, address="jane@example.com"):
        return asyncio.run(probe_cls(make_context(dns=dns)).run(parse_email(address)))

    def test_mx_present(self):
        outcome = self.run_dns(MailDnsProbe, healthy_dns())
        assert outcome.credit == 1.0
        assert outcome.detail["has_mx"] is True

    def test_a_record_accepts_mail(self):
        outcome = self.run_dns(MailDnsProbe, FakeDns({("example.com", "A"): ["93.184.216.34"]}))
        assert outcome.credit == 1.0
        assert outcome.detail["has_mx"] is False

    def test_no_mail_server(self):
        outcome = self.run_dns(MailDnsProbe, FakeDns())
        assert outcome.credit == 0.0
        assert outcome.detail["penalty"] is True

    def test_resolver_failure_is_failed(self):
        dns = FakeDns({
            ("example.com", "MX"): DnsLookupError("timeout"),
            ("example.com", "A"): DnsLookupError("timeout"),
        })
        outcome = self.run_dns(MailDnsProbe, dns)
        assert outcome.status is ProbeStatus.FAILED
        assert "MX and A lookups failed" in outcome.reason

    def test_spf_and_dmarc(self):
        assert self.run_dns(MailAuthProbe, healthy_dns()).credit == 1.0

    def test_spf_only(self):
        dns = FakeDns({("example.com", "TXT"): ["v=spf1 -all"]})
        outcome = self.run_dns(MailAuthProbe, dns)
        assert outcome.credit == 0.5
        assert dict(outcome.detail) == {"has_spf": True, "has_dmarc": False}

    def test_no_authentication(self):
        outcome = self.run_dns(MailAuthProbe, FakeDns())
        assert outcome.credit == 0.0
        assert outcome.detail["penalty"] is True


class TestEmailVerifier:
    def test_personal_free_mailbox_is_deliverable(self):
        envelope = verify("Jane.Doe@Gmail.com", healthy_dns("gmail.com"))
        # every check passes except the free provider (3 of 148)
        assert envelope.score == 98
        assert envelope.verdict is EmailVerdict.DELIVERABLE
        assert envelope.details["email"] == "jane.doe@gmail.com"
        assert envelope.details["is_free_provider"] is True
        assert envelope.details["risk_level"] == "low"
        assert envelope.details["risk_factors"] == []

    def test_disposable_mailbox_is_risky(self):
        dns = FakeDns({
            ("mailinator.com", "MX"): ["10 mail.mailinator.com"],
            ("mailinator.com", "TXT"): ["v=spf1 -all"],
        })
        envelope = verify("jane.doe@mailinator.com", dns)
        # 50 + 20 + 10 + 15 + 5 + 3 of 148
        assert envelope.score == 70
        assert envelope.verdict is EmailVerdict.RISKY
        assert "Disposable/temporary email service" in envelope.details["risk_factors"]

    def test_typo_domain_suggestion(self):
        envelope = verify("info@gmial.com", FakeDns())
        assert envelope.details["suggestions"] == ["Did you mean info@gmail.com?"]
        assert len(envelope.details["risk_factors"]) == 4

    def test_generated_address_on_dead_domain_is_undeliverable(self):
        envelope = verify("qwerty@mailinator.com", FakeDns())
        # 20 + 10 + 3 of 148
        assert envelope.score == 22
        assert envelope.verdict is EmailVerdict.UNDELIVERABLE
        assert envelope.details["risk_level"] == "critical"

    def test_bad_syntax_never_reaches_dns(self):
        dns = FakeDns()
        envelope = verify("not-an-email", dns)
        assert envelope.error == "Invalid email: must contain exactly one @ symbol"
        assert envelope.score == 0
        assert envelope.verdict is EmailVerdict.UNDELIVERABLE
        assert dns.queries == []

    @pytest.mark.parametrize("score,level", [(95, "low"), (80, "low"), (65, "medium"), (30, "high"), (12, "critical")])
    def test_risk_level(self, score, level):
        assert risk_level(score) == level


class TestBulkEmail:
    def test_summary(self):
        verifier = EmailVerifier(make_context(dns=healthy_dns("gmail.com")))
        report = asyncio.run(verify_emails(["jane.doe@gmail.com", "broken"], verifier))
        assert report["total"] == 2
        assert report["summary"] == {"deliverable": 1, "risky": 0, "undeliverable": 0, "error": 1}
        assert report["results"][0]["email"] == "jane.doe@gmail.com"

    def test_over_limit(self):
        with pytest.raises(StructuralError, match="maximum 1"):
            asyncio.run(verify_emails(["a@b.com", "c@d.com"], EmailVerifier(make_context()), limit=1))

    def test_not_a_list(self):
        with pytest.raises(StructuralError, match="emails"):
            asyncio.run(verify_emails("a@b.com", EmailVerifier(make_context())))
