"""Utility helpers for PhotoRenamer."""
