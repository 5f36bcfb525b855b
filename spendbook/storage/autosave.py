"""Mini README: Background saver that periodically persists the ledger.

Structure:
    * PeriodicSaver - daemon thread saving ``ledger.all()`` snapshots.

The saver only holds the ledger lock while ``all()`` copies the records; the
file is written afterwards, so interactive callers are never blocked on disk
I/O. Storage failures are logged and counted but never stop the thread; the
next tick simply tries again.
"""

from __future__ import annotations

import threading
from typing import Optional

from ..errors import StorageError
from ..ledger.ledger import ExpenseLedger
from ..logging_utils import get_logger
from .file_store import ExpenseFileStore

LOGGER = get_logger(__name__)


class PeriodicSaver:
    """Persist a ledger on a fixed interval from a background thread."""

    def __init__(
        self,
        ledger: ExpenseLedger,
        store: ExpenseFileStore,
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Autosave interval must be positive.")
        self._ledger = ledger
        self._store = store
        self._interval = interval_seconds
        self._stop_event = threading.Event()
        self._save_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self.saves = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Launch the background thread; calling twice is a no-op."""

        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="spendbook-autosave", daemon=True)
        self._thread.start()
        LOGGER.info("Autosave started (every %.1f seconds)", self._interval)

    def stop(self, *, final_save: bool = True) -> None:
        """Stop the thread and optionally persist one last snapshot."""

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        LOGGER.info("Autosave stopped after %s saves, %s failures", self.saves, self.failures)
        if final_save:
            self.save_now()

    def save_now(self) -> bool:
        """Save immediately, returning ``False`` when storage failed."""

        snapshot = self._ledger.all()
        with self._save_lock:
            try:
                self._store.save(snapshot)
            except StorageError as error:
                self.failures += 1
                LOGGER.error("Autosave failed: %s", error)
                return False
            self.saves += 1
        return True

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.save_now()
