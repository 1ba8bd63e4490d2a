"""
Tests for the network clients (no real network).
"""
import asyncio
import json
from datetime import datetime, timezone

import dns.exception
import dns.resolver
import httpx
import pytest

from verifyiq.domain.errors import DnsLookupError, HttpError, ProbeError
from verifyiq.infrastructure import DnsClient, JsonHttpClient
from verifyiq.infrastructure.tls import parse_cert_time


class FakeAnswer:
    def __init__(self, text=None, strings=()):
        self.text = text
        self.strings = strings

    def to_text(self):
        return self.text


class FakeResolver:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def resolve(self, name, rdtype, lifetime=None):
        self.calls.append((name, rdtype, lifetime))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def resolve(result, rdtype="A"):
    client = DnsClient(timeout=3, resolver=FakeResolver(result))
    return asyncio.run(client.resolve("example.com", rdtype))


class TestDnsClient:
    def test_values_stripped(self):
        assert resolve([FakeAnswer("ns1.example.com."), FakeAnswer("ns2.example.com.")], "NS") == [
            "ns1.example.com", "ns2.example.com",
        ]

    def test_txt_strings_joined(self):
        answers = [FakeAnswer(strings=(b"v=spf1 ", b"include:_spf.example.com ~all"))]
        assert resolve(answers, "TXT") == ["v=spf1 include:_spf.example.com ~all"]

    @pytest.mark.parametrize("error", [dns.resolver.NXDOMAIN(), dns.resolver.NoAnswer()])
    def test_no_record_is_empty(self, error):
        assert resolve(error) == []

    def test_timeout_is_lookup_error(self):
        with pytest.raises(DnsLookupError):
            resolve(dns.exception.Timeout())

    def test_lookup_error_is_probe_error(self):
        assert issubclass(DnsLookupError, ProbeError)

    def test_lifetime_passed(self):
        resolver = FakeResolver([])
        asyncio.run(DnsClient(timeout=2.5, resolver=resolver).resolve("example.com", "MX"))
        assert resolver.calls == [("example.com", "MX", 2.5)]


def client_for(handler):
    return JsonHttpClient(timeout=2, user_agent="VerifyIQ/test", transport=httpx.MockTransport(handler))


class TestJsonHttpClient:
    def test_get_json(self):
        def handler(request):
            assert request.headers["User-Agent"] == "VerifyIQ/test"
            assert request.url.params["q"] == "1"
            return httpx.Response(200, json={"ok": True})
        assert asyncio.run(client_for(handler).get_json("https://api.example.com/x", params={"q": 1})) == {"ok": True}

    def test_post_json(self):
        def handler(request):
            assert request.method == "POST"
            assert json.loads(request.content) == {"a": 1}
            return httpx.Response(200, json=[1, 2])
        assert asyncio.run(client_for(handler).post_json("https://api.example.com/x", {"a": 1})) == [1, 2]

    def test_status_error(self):
        handler = lambda request: httpx.Response(503)  # noqa: E731
        with pytest.raises(HttpError, match="HTTP 503 from api.example.com"):
            asyncio.run(client_for(handler).get_json("https://api.example.com/x?key=secret"))

    def test_key_not_leaked(self):
        handler = lambda request: httpx.Response(500)  # noqa: E731
        with pytest.raises(HttpError) as excinfo:
            asyncio.run(client_for(handler).get_json("https://api.example.com/x", params={"key": "secret"}))
        assert "secret" not in str(excinfo.value)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)
        with pytest.raises(HttpError, match="ConnectError"):
            asyncio.run(client_for(handler).get_json("https://api.example.com/x"))

    def test_invalid_json(self):
        handler = lambda request: httpx.Response(200, content=b"<html>")  # noqa: E731
        with pytest.raises(HttpError, match="invalid JSON"):
            asyncio.run(client_for(handler).get_json("https://api.example.com/x"))


class TestCertTime:
    def test_parse(self):
        assert parse_cert_time("Jun  1 12:00:00 2026 GMT") == datetime(2026, 6, 1, 12, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_unparseable(self, value):
        assert parse_cert_time(value) is None
