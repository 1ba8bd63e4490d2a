"""Signal probes."""
from .base import Probe
from .context import ScanContext
from .fallback import Assessment, FallbackChain, FallbackProbe, Strategy

__all__ = ['Probe', 'ScanContext', 'Assessment', 'FallbackChain', 'FallbackProbe', 'Strategy']
