"""
VerifyIQ - multi-signal trust scoring.

Scores URLs, social profiles, product listings, token contracts and
advertiser profiles from independent concurrent signals.
"""
__version__ = "2.0.0"
