"""
Promo Curator

Curation tooling for a catalog of AI product promotions (free tiers,
credits, trials): URL and title de-duplication, submission checks for
new entries, and expiry reporting.
"""

__version__ = "0.1.0"
__author__ = "Promo Curator Team"
