"""Scoring services, one per artifact kind."""
from .ads import AdTransparencyChecker
from .base import ScoringService
from .bulk import scan_urls, verify_emails
from .darkweb import DarkWebScanner
from .dropship import DropshipDetector
from .email import EmailVerifier
from .engagement import EngagementAuditor
from .rugpull import RugPullAnalyzer
from .social import SocialAuthenticityAnalyzer
from .supplier import SupplierScorer
from .trading import TradingShield
from .url import UrlScanner

__all__ = [
    'ScoringService',
    'UrlScanner', 'DarkWebScanner', 'SocialAuthenticityAnalyzer',
    'DropshipDetector', 'RugPullAnalyzer', 'AdTransparencyChecker',
    'EmailVerifier', 'SupplierScorer', 'EngagementAuditor', 'TradingShield',
    'scan_urls', 'verify_emails',
]
