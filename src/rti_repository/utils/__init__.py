"""Utility helpers for the data-access layer."""

from .clock import Clock, now_ms

__all__ = ["Clock", "now_ms"]
