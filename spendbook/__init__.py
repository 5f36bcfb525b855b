"""Mini README: Core package initializer for the Spendbook expense tracker.

This module exposes convenience imports that allow front ends to reach the
ledger, persistence and logging helpers without needing to know the exact
module structure. The file is intentionally lightweight so that package
metadata can be centralised here without introducing heavy runtime
dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
