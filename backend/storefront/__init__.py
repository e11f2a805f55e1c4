"""Kitabghor storefront catalog: category tree, faceted filters, navigation state."""

__version__ = "0.1.0"
