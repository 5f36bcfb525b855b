"""Mini README: Front-end adapters for Spendbook.

Structure:
    * ExpenseSession - ledger, file store and exporter wired together.
    * run_menu - interactive console menu driving a session.
"""

from .menu import format_statistics, run_menu
from .session import ExpenseSession

__all__ = ["ExpenseSession", "format_statistics", "run_menu"]
