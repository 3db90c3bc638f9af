# ────────────────────────────── utils/__init__.py ──────────────────────────────
"""
VaxTrack - Utility Package

This package provides:
- Structured logging utilities
- An injectable clock for everything that depends on "now"
"""

from .clock import Clock, FixedClock, utcnow
from .logger import logger, setup_logging

__all__ = [
	'Clock',
	'FixedClock',
	'utcnow',
	'logger',
	'setup_logging'
]
