"""
Bulk URL scan and bulk email verification.

Scores up to a configured number of subjects concurrently with a bounded
number of scans in flight, and summarises verdict counts.
"""
import asyncio
import logging
from collections import Counter
from typing import Any, Dict, Optional, Sequence

from ..config import BULK_EMAIL_LIMIT, BULK_SCAN_LIMIT
from ..domain.errors import StructuralError
from ..domain.verdict import EmailVerdict, UrlVerdict
from .email import EmailVerifier
from .url import UrlScanner

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


async def _score_many(service, field: str, label: str, items: Sequence[Any], verdicts,
                      limit: int, max_concurrency: int) -> Dict[str, Any]:
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise StructuralError(f"Please provide a \"{field}s\" array")
    if len(items) > limit:
        raise StructuralError(f"Too many {label}: maximum {limit} per bulk request")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def score_one(item):
        async with semaphore:
            return await service.score({field: item})

    envelopes = await asyncio.gather(*(score_one(item) for item in items))

    results = []
    counts = Counter()
    for item, envelope in zip(items, envelopes):
        results.append({field: item, **envelope.to_dict()})
        counts["error" if envelope.error else envelope.verdict.value] += 1

    summary = {verdict.value: counts[verdict.value] for verdict in verdicts}
    summary["error"] = counts["error"]
    logger.info(f"Bulk {service.kind.value} of {len(items)} items: {summary}")

    return {"total": len(results), "summary": summary, "results": results}


async def scan_urls(urls: Sequence[Any], scanner: Optional[UrlScanner] = None,
                    limit: int = BULK_SCAN_LIMIT,
                    max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> Dict[str, Any]:
    """
    Scan many URLs.

    Args:
        urls: URLs to scan (order preserved in results)
        scanner: UrlScanner to use (default: real network clients)
        limit: Maximum number of URLs accepted
        max_concurrency: Scans in flight at once

    Returns:
        {"total", "summary": {verdict: count, "error": count}, "results": [...]}

    Raises:
        StructuralError: urls is not a list or exceeds the limit
    """
    return await _score_many(scanner or UrlScanner(), "url", "URLs", urls, UrlVerdict, limit, max_concurrency)


async def verify_emails(emails: Sequence[Any], verifier: Optional[EmailVerifier] = None,
                        limit: int = BULK_EMAIL_LIMIT,
                        max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> Dict[str, Any]:
    """Verify many email addresses. Same shape and errors as scan_urls."""
    return await _score_many(verifier or EmailVerifier(), "email", "emails", emails, EmailVerdict, limit, max_concurrency)
