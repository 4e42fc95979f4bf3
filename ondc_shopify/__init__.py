"""ONDC seller-side adapter for a Shopify storefront."""

__version__ = "0.1.0"
