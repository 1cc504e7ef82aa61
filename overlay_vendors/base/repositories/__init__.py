"""Repositories used by the vendor layer."""
