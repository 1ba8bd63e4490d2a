"""
CLI Interface
Score artifacts from the command line or start the API server.

Usage:
    python -m verifyiq url https://example.com
    python -m verifyiq darkweb silkroad-market.xyz
    python -m verifyiq bulk https://a.com https://b.com
    python -m verifyiq social --followers 120000 --following 80 --avg-likes 40
    python -m verifyiq dropship "Minimalist Watch Gold" --price 39.99 --store-url https://x.myshopify.com
    python -m verifyiq rugpull 0x... --chain bsc
    python -m verifyiq ads garyvee --platform instagram --bio "Free course, link in bio"
    python -m verifyiq email jane@gmial.com
    python -m verifyiq supplier https://acme-wholesale.com
    python -m verifyiq engagement instagram.com/someinfluencer
    python -m verifyiq trading https://binance.com
    python -m verifyiq serve --port 3000
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .analyzers import (
    AdTransparencyChecker,
    DarkWebScanner,
    DropshipDetector,
    EmailVerifier,
    EngagementAuditor,
    RugPullAnalyzer,
    SocialAuthenticityAnalyzer,
    SupplierScorer,
    TradingShield,
    UrlScanner,
    scan_urls,
)
from .config import API_HOST, API_PORT, LOG_LEVEL
from .domain.errors import StructuralError
from .domain.verdict import get_verdict_color

RESET = "\033[0m"


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def print_envelope(envelope):
    """Human readable summary with per-probe explanations."""
    color = get_verdict_color(envelope.verdict)
    print(f"[*] {envelope.kind.value} score: {color}{envelope.score}/100 {envelope.verdict.value}{RESET}")
    if envelope.error:
        print(f"[ERROR] {envelope.error}")
        return

    for row in envelope.probe_detail():
        credit = f"{row['credit']:.2f}" if row['credit'] is not None else "  - "
        weight = f"x{row['weight']:g}" if row['weight'] is not None else ""
        print(f"  {row['name']:24} {row['outcome']:9} {credit} {weight:5} {row['explanation']}")

    for key, value in envelope.details.items():
        if isinstance(value, (dict, list)) and not value:
            continue
        if isinstance(value, (dict, list)):
            value = json.dumps(value, ensure_ascii=False)
        print(f"  {key}: {value}")
    print(f"  ({envelope.processing_time_ms} ms)")


def print_bulk(report):
    print(f"[*] Bulk scan: {report['total']} URLs")
    for verdict, count in report["summary"].items():
        print(f"  {verdict:12} {count:5}")
    print("=" * 50)
    for row in report["results"]:
        status = row["error"] or f"{row['score']:3} {row['verdict']}"
        print(f"  {row['url']}: {status}")


def _read_urls(args):
    urls = list(args.urls)
    if args.file:
        path = Path(args.file)
        if not path.exists():
            raise StructuralError(f"File not found: {path}")
        urls.extend(line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip())
    return urls


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='verifyiq',
        description='VerifyIQ multi-signal trust scoring',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  url        Score a website URL
  darkweb    Dark web exposure of a domain
  bulk       Score up to 50 URLs at once
  social     Social profile authenticity
  dropship   Dropship likelihood of a product listing
  rugpull    Honeypot / rug pull risk of a token contract
  ads        Ad transparency of an influencer profile
  email      Deliverability and risk of an email address
  supplier   Trust score of a supplier website
  engagement Engagement audit of a social profile URL
  trading    Risk level of a trading platform
  serve      Run the HTTP API
        """
    )
    parser.add_argument('--json', action='store_true', help='Print the raw JSON envelope')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('url', help='Score a website URL')
    p.add_argument('url')

    p = sub.add_parser('darkweb', help='Dark web exposure scan')
    p.add_argument('url')

    p = sub.add_parser('bulk', help='Score many URLs')
    p.add_argument('urls', nargs='*')
    p.add_argument('--file', '-f', help='File with one URL per line')

    p = sub.add_parser('social', help='Social profile authenticity')
    p.add_argument('--followers', type=int, required=True)
    p.add_argument('--following', type=int, default=0)
    p.add_argument('--avg-likes', type=float)
    p.add_argument('--verified', action='store_true')
    p.add_argument('--created', help='Account creation date (ISO 8601)')

    p = sub.add_parser('dropship', help='Dropship likelihood')
    p.add_argument('title')
    p.add_argument('--price', type=float)
    p.add_argument('--store-url')
    p.add_argument('--image-url')
    p.add_argument('--currency', default='USD')

    p = sub.add_parser('rugpull', help='Token contract risk')
    p.add_argument('address')
    p.add_argument('--chain', default='ethereum')

    p = sub.add_parser('ads', help='Ad transparency')
    p.add_argument('username')
    p.add_argument('--platform', default='unknown')
    p.add_argument('--bio', default='')
    p.add_argument('--followers', type=int, default=0)

    p = sub.add_parser('email', help='Verify an email address')
    p.add_argument('email')

    p = sub.add_parser('supplier', help='Supplier trust score')
    p.add_argument('url')

    p = sub.add_parser('engagement', help='Engagement audit')
    p.add_argument('url')

    p = sub.add_parser('trading', help='Trading platform shield')
    p.add_argument('url')

    p = sub.add_parser('serve', help='Run the HTTP API')
    p.add_argument('--host', default=API_HOST)
    p.add_argument('--port', type=int, default=API_PORT)

    return parser


def _service_and_payload(args):
    if args.command == 'url':
        return UrlScanner(), {"url": args.url}
    if args.command == 'darkweb':
        return DarkWebScanner(), {"url": args.url}
    if args.command == 'social':
        return SocialAuthenticityAnalyzer(), {
            "followers": args.followers,
            "following": args.following,
            "avg_likes": args.avg_likes,
            "is_verified": args.verified,
            "creation_date": args.created,
        }
    if args.command == 'dropship':
        return DropshipDetector(), {
            "product_title": args.title,
            "price": args.price,
            "store_url": args.store_url,
            "image_url": args.image_url,
            "currency": args.currency,
        }
    if args.command == 'rugpull':
        return RugPullAnalyzer(), {"address": args.address, "chain": args.chain}
    if args.command == 'ads':
        return AdTransparencyChecker(), {
            "username": args.username,
            "platform": args.platform,
            "bio": args.bio,
            "followers": args.followers,
        }
    if args.command == 'email':
        return EmailVerifier(), {"email": args.email}
    if args.command == 'supplier':
        return SupplierScorer(), {"url": args.url}
    if args.command == 'engagement':
        return EngagementAuditor(), {"url": args.url}
    if args.command == 'trading':
        return TradingShield(), {"url": args.url}
    raise ValueError(f"unknown command: {args.command}")


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'serve':
        import uvicorn
        print(f"[*] VerifyIQ API on http://{args.host}:{args.port}")
        uvicorn.run("verifyiq.api:app", host=args.host, port=args.port, log_level="debug" if args.verbose else "info")
        return 0

    if args.command == 'bulk':
        try:
            urls = _read_urls(args)
            report = asyncio.run(scan_urls(urls))
        except StructuralError as e:
            print(f"[ERROR] {e}")
            return 1
        if args.json:
            print(json.dumps(report, indent=2, ensure_ascii=False))
        else:
            print_bulk(report)
        return 0

    service, payload = _service_and_payload(args)
    envelope = asyncio.run(service.score(payload))
    if args.json:
        print(json.dumps(envelope.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_envelope(envelope)
    return 1 if envelope.error else 0
