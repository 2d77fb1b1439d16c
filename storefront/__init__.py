"""Storefront catalog API."""
