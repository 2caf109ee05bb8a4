"""Utility helpers for dbgrep."""
