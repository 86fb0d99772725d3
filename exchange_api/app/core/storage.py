"""
File‑backed store of exchanges.

All exchanges live in memory in one ``ExchangeStore``, keyed by id, and
each one is mirrored to ``<directory>/<id>.json``.  On startup
``load`` reads every ``*.json`` file of the directory; a file that
cannot be read or parsed aborts startup rather than being skipped.

A single lock covers the whole store, including id allocation, so
every command must run inside ``store.transaction()``::

    with store.transaction():
        exchange = store.get(exchange_id)
        ...
        store.save(updated)

``save`` writes the file first and only then replaces the in‑memory
value, so a failed write leaves memory unchanged and the error
propagates to the caller.
"""

import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ..schemas.exchange import Exchange


logger = logging.getLogger(__name__)


class ExchangeStore:
    """In‑memory exchanges with one JSON file per exchange."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self._exchanges: Dict[int, Exchange] = {}
        self._lock = threading.Lock()

    def load(self) -> int:
        """Create the directory if needed and load every stored exchange.

        Returns the number of exchanges loaded.  Any unreadable or
        invalid file raises, leaving the store as it was before the
        call.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        loaded: Dict[int, Exchange] = {}
        for path in sorted(self.directory.glob("*.json")):
            try:
                exchange = Exchange.model_validate_json(path.read_text(encoding="utf-8"))
            except Exception:
                logger.exception("Failed to load exchange file %s", path)
                raise
            loaded[exchange.id] = exchange
        with self._lock:
            self._exchanges = loaded
        logger.info("Loaded %d exchange(s) from %s", len(loaded), self.directory)
        return len(loaded)

    @contextmanager
    def transaction(self) -> Iterator["ExchangeStore"]:
        """Hold the store lock for the duration of a command.

        The lock is a plain ``threading.Lock``; callers must never
        ``await`` while holding it.
        """
        with self._lock:
            yield self

    # The methods below expect the caller to hold the lock.

    def next_id(self) -> int:
        if not self._exchanges:
            return 1
        return max(self._exchanges) + 1

    def get(self, exchange_id: int) -> Optional[Exchange]:
        return self._exchanges.get(exchange_id)

    def ids(self) -> List[int]:
        return sorted(self._exchanges)

    def __len__(self) -> int:
        return len(self._exchanges)

    def path_for(self, exchange_id: int) -> Path:
        return self.directory / f"{exchange_id}.json"

    def save(self, exchange: Exchange) -> None:
        """Persist ``exchange`` and make it the current in‑memory value."""
        self._write(exchange)
        self._exchanges[exchange.id] = exchange

    def remove(self, exchange_id: int) -> None:
        """Delete an exchange's file and drop it from memory."""
        self.path_for(exchange_id).unlink(missing_ok=True)
        self._exchanges.pop(exchange_id, None)

    def _write(self, exchange: Exchange) -> None:
        path = self.path_for(exchange.id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(exchange.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError:
            logger.exception("Failed to write exchange %s to %s", exchange.id, path)
            raise
