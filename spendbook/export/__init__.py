"""Mini README: Export utilities for Spendbook ledgers.

Exposes helpers that render ledger snapshots into tabular files that
spreadsheet applications open directly. Future exporters can be registered
alongside the existing one.
"""

from .tabular_exporter import HEADER, TabularExporter

__all__ = ["HEADER", "TabularExporter"]
