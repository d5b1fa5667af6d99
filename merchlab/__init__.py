# __init__.py
"""
MerchLab backend.

Marketing endpoints for a Shopify storefront: GiftGenie gift suggestions,
the TeeLab design gallery with votes, the style suggester, and email signups.
"""

__version__ = "1.0.0"
