"""
VerifyIQ API - FastAPI boundary.

JSON in, JSON out. Every scoring route answers 200 with the result
envelope; a structurally invalid subject answers 400 with the zero-score
envelope as body. Missing or mistyped fields are rejected by pydantic (422).

Run:
    uvicorn verifyiq.api:app --port 3000
    python -m verifyiq serve
"""
import logging
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
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
    verify_emails,
)
from .config import CORS_ORIGINS
from .domain.envelope import ResultEnvelope
from .domain.errors import StructuralError
from .probes.context import ScanContext

logger = logging.getLogger(__name__)

_context: Optional[ScanContext] = None


def get_context() -> ScanContext:
    """Process-wide scan context (overridden in tests)."""
    global _context
    if _context is None:
        _context = ScanContext.default()
    return _context


# Request models
class UrlRequest(BaseModel):
    url: str


class BulkScanRequest(BaseModel):
    urls: List[str]


class SocialRequest(BaseModel):
    followers: int
    following: int = 0
    avg_likes: Optional[float] = None
    is_verified: bool = False
    creation_date: Optional[str] = None


class DropshipRequest(BaseModel):
    product_title: str
    price: Optional[float] = None
    image_url: Optional[str] = None
    store_url: Optional[str] = None
    currency: str = "USD"


class RugPullRequest(BaseModel):
    address: str
    chain: str = "ethereum"


class AdTransparencyRequest(BaseModel):
    username: str
    platform: str = "unknown"
    bio: str = ""
    followers: int = 0


class EmailRequest(BaseModel):
    email: str


class BulkEmailRequest(BaseModel):
    emails: List[str]


ENDPOINTS = [
    "GET  /api/health",
    "POST /api/scan-url",
    "POST /api/darkweb-scan",
    "POST /api/bulk-scan",
    "POST /api/social-authenticity",
    "POST /api/dropship-check",
    "POST /api/rug-pull-check",
    "POST /api/ad-transparency",
    "POST /api/verify-email",
    "POST /api/verify-email/bulk",
    "POST /api/supplier-score",
    "POST /api/audit-engagement",
    "POST /api/trading-shield",
]

app = FastAPI(
    title="VerifyIQ API",
    description="Multi-signal trust scoring for URLs, profiles, listings and token contracts",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _respond(envelope: ResultEnvelope) -> JSONResponse:
    status_code = 400 if envelope.error else 200
    return JSONResponse(status_code=status_code, content=envelope.to_dict())


def _payload(body: BaseModel) -> dict:
    return body.model_dump()


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "version": __version__, "endpoints": ENDPOINTS}


@app.post("/api/scan-url")
async def scan_url(body: UrlRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await UrlScanner(ctx).score(_payload(body)))


@app.post("/api/darkweb-scan")
async def darkweb_scan(body: UrlRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await DarkWebScanner(ctx).score(_payload(body)))


@app.post("/api/bulk-scan")
async def bulk_scan(body: BulkScanRequest, ctx: ScanContext = Depends(get_context)):
    try:
        return await scan_urls(body.urls, UrlScanner(ctx), limit=ctx.config.bulk_scan_limit)
    except StructuralError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})


@app.post("/api/social-authenticity")
async def social_authenticity(body: SocialRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await SocialAuthenticityAnalyzer(ctx).score(_payload(body)))


@app.post("/api/dropship-check")
async def dropship_check(body: DropshipRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await DropshipDetector(ctx).score(_payload(body)))


@app.post("/api/rug-pull-check")
async def rug_pull_check(body: RugPullRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await RugPullAnalyzer(ctx).score(_payload(body)))


@app.post("/api/ad-transparency")
async def ad_transparency(body: AdTransparencyRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await AdTransparencyChecker(ctx).score(_payload(body)))


@app.post("/api/verify-email")
async def verify_email(body: EmailRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await EmailVerifier(ctx).score(_payload(body)))


@app.post("/api/verify-email/bulk")
async def verify_email_bulk(body: BulkEmailRequest, ctx: ScanContext = Depends(get_context)):
    try:
        return await verify_emails(body.emails, EmailVerifier(ctx), limit=ctx.config.bulk_email_limit)
    except StructuralError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})


@app.post("/api/supplier-score")
async def supplier_score(body: UrlRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await SupplierScorer(ctx).score(_payload(body)))


@app.post("/api/audit-engagement")
async def audit_engagement(body: UrlRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await EngagementAuditor(ctx).score(_payload(body)))


@app.post("/api/trading-shield")
async def trading_shield(body: UrlRequest, ctx: ScanContext = Depends(get_context)):
    return _respond(await TradingShield(ctx).score(_payload(body)))
