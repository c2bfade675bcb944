"""Utility helpers (logging, errors)."""
