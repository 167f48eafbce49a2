"""Shared helpers: coordinate coercion and number formatting."""
