"""In-memory record store with a single coordinated load"""

import asyncio
import logging
import time
from enum import Enum
from typing import Dict, List, Optional, Tuple

from sales_gateway.domain.exceptions import StoreNotReadyError
from sales_gateway.domain.models import SalesRecord
from sales_gateway.domain.options import options_for
from sales_gateway.infrastructure.clients.csv_source import SalesDataSource
from sales_gateway.infrastructure.observability.logging import log_store_loaded
from sales_gateway.infrastructure.observability.metrics import record_store_load

logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class RecordStore:
    """
    Holds the immutable sales dataset for the process lifetime.

    State machine:
        UNLOADED -> LOADING -> READY
                           \\-> FAILED -> LOADING (retried on next load())

    Concurrent load() callers share one in-flight task, so the source is
    fetched once no matter how many requests arrive before it completes.
    A failure is raised to every caller awaiting that attempt.
    """

    def __init__(self, source: SalesDataSource | None = None):
        self.source = source or SalesDataSource()
        self._state = StoreState.UNLOADED
        self._records: Tuple[SalesRecord, ...] = ()
        self._options: Dict[str, List[str]] = {}
        self._inflight: Optional[asyncio.Task] = None

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    async def load(self) -> None:
        """Populate the store once; no-op when already loaded"""
        if self._state is StoreState.READY:
            return

        if self._inflight is None:
            self._state = StoreState.LOADING
            self._inflight = asyncio.ensure_future(self._load())

        # A cancelled caller must not cancel the load other callers are awaiting
        await asyncio.shield(self._inflight)

    async def _load(self) -> None:
        start_time = time.perf_counter()
        try:
            records = await self.source.fetch_records()
        except Exception:
            self._records = ()
            self._options = {}
            self._state = StoreState.FAILED
            record_store_load(False, time.perf_counter() - start_time)
            logger.exception("Sales record load failed", extra={"source": self._source_name()})
            raise
        else:
            self._records = tuple(records)
            self._options = options_for(self._records)
            self._state = StoreState.READY

            duration = time.perf_counter() - start_time
            record_store_load(True, duration, len(self._records))
            log_store_loaded(self._source_name(), len(self._records), duration * 1000)
        finally:
            self._inflight = None

    def all(self) -> Tuple[SalesRecord, ...]:
        """Full record collection; raises StoreNotReadyError before a successful load"""
        if self._state is not StoreState.READY:
            raise StoreNotReadyError(f"Record store is {self._state.value}")
        return self._records

    def options(self) -> Dict[str, List[str]]:
        """Filter option lists computed over the whole dataset at load time"""
        if self._state is not StoreState.READY:
            raise StoreNotReadyError(f"Record store is {self._state.value}")
        return {name: list(values) for name, values in self._options.items()}

    def __len__(self) -> int:
        return len(self._records)

    def _source_name(self) -> str:
        return getattr(self.source, "description", type(self.source).__name__)
