import logging
import threading
from typing import Callable, Optional

from fastapi import HTTPException, Request, status

from josaa_api.exceptions import LoadError
from josaa_api.store import SeatStore

logger = logging.getLogger("DatasetProvider")

class SeatStoreProvider:
    """
    One-time initialization barrier around the dataset load.
    - The first caller runs the loader; concurrent callers wait on the same
      attempt instead of starting another one.
    - A failed load is remembered and re-raised. It is NOT retried.
    """

    def __init__(self, loader: Callable[[], SeatStore]):
        self._loader = loader
        self._lock = threading.Lock()
        self._store: Optional[SeatStore] = None
        self._error: Optional[LoadError] = None

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    @property
    def error(self) -> Optional[LoadError]:
        return self._error

    def get(self) -> SeatStore:
        store = self._store
        if store is not None:
            return store

        with self._lock:
            if self._store is not None:
                return self._store
            if self._error is not None:
                raise self._error
            try:
                self._store = self._loader()
            except LoadError as e:
                logger.critical(f"❌ Dataset load failed: {e}")
                self._error = e
                raise
            logger.info(f"✅ Dataset ready: {self._store.count()} records")
            return self._store

# --- DEPENDENCIES ---
def get_store(request: Request) -> SeatStore:
    provider: SeatStoreProvider = request.app.state.store_provider
    try:
        return provider.get()
    except LoadError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Dataset unavailable: {e}",
        )
