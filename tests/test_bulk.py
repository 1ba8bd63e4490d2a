"""
Tests for bulk URL scanning.
"""
import asyncio

import pytest

from conftest import healthy_dns, make_context
from verifyiq.analyzers.bulk import scan_urls
from verifyiq.analyzers.url import UrlScanner
from verifyiq.domain.envelope import ResultEnvelope
from verifyiq.domain.errors import StructuralError
from verifyiq.domain.kinds import Kind
from verifyiq.domain.verdict import UrlVerdict


class CountingScanner:
    kind = Kind.URL

    def __init__(self):
        self.in_flight = 0
        self.peak = 0

    async def score(self, payload):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return ResultEnvelope(kind=Kind.URL, score=80, verdict=UrlVerdict.SAFE)


class TestScanUrls:
    def test_mixed_batch(self):
        scanner = UrlScanner(make_context(dns=healthy_dns()))
        urls = ["https://example.com", "not a url", "http://paypal-secure-login.xyz"]
        result = asyncio.run(scan_urls(urls, scanner))
        assert result["total"] == 3
        assert result["summary"] == {"safe": 1, "suspicious": 0, "dangerous": 1, "error": 1}
        assert [row["url"] for row in result["results"]] == urls
        assert result["results"][1]["error"].startswith("Invalid URL format")

    def test_limit_enforced(self):
        with pytest.raises(StructuralError, match="maximum 2"):
            asyncio.run(scan_urls(["a", "b", "c"], CountingScanner(), limit=2))

    @pytest.mark.parametrize("urls", ["https://example.com", None, {"url": "x"}])
    def test_not_a_list(self, urls):
        with pytest.raises(StructuralError, match="urls"):
            asyncio.run(scan_urls(urls, CountingScanner()))

    def test_concurrency_bounded(self):
        scanner = CountingScanner()
        result = asyncio.run(scan_urls([f"https://site{i}.com" for i in range(8)], scanner, max_concurrency=3))
        assert scanner.peak <= 3
        assert result["summary"]["safe"] == 8

    def test_empty_list(self):
        result = asyncio.run(scan_urls([], CountingScanner()))
        assert result == {"total": 0, "summary": {"safe": 0, "suspicious": 0, "dangerous": 0, "error": 0},
                          "results": []}
