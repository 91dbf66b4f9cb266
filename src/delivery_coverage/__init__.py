"""Delivery coverage resolution service for the restaurant storefront."""

__version__ = "2.1.0"
