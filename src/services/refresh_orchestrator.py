# src/services/refresh_orchestrator.py

"""Drives one refresh cycle: catalog + FX, basic records, then details.

Cycle states::

    IDLE -> FETCHING_CATALOG -> PROCESSING_BASIC -> FETCHING_DETAILS -> SETTLED
                  |
                  +-> FAILED

Every ``refresh()`` call takes a new generation number.  A cycle only
publishes or changes state while its generation is the latest one, so a
refresh started mid-cycle silently discards the older cycle's late
results without cancelling its requests.

The orchestrator is the only writer of the record set.  Each update
replaces the whole tuple, so listeners holding an earlier snapshot
never see it change under them.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.config.settings import Settings
from src.fetchers.giftcard_client import GiftCardClient
from src.models.errors import GiftCardMonitorError, PartialDetailError
from src.models.product import ProductDetail, RawProduct
from src.models.record import ProcessedRecord
from src.processing.data_processor import DataProcessor

logger = logging.getLogger("giftcard_monitor.orchestrator")


class CycleState(str, Enum):
    """Lifecycle of a refresh cycle."""

    IDLE = "idle"
    FETCHING_CATALOG = "fetching_catalog"
    PROCESSING_BASIC = "processing_basic"
    FETCHING_DETAILS = "fetching_details"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass(frozen=True)
class CycleUpdate:
    """Snapshot handed to listeners on every publish."""

    generation: int
    state: CycleState
    records: tuple[ProcessedRecord, ...]
    details_settled: int = 0
    details_total: int = 0
    error: str | None = None


@dataclass
class CycleResult:
    """Outcome of a completed (or aborted) refresh cycle."""

    generation: int
    state: CycleState = CycleState.IDLE
    records: tuple[ProcessedRecord, ...] = ()
    local_per_usd: float | None = None
    error: str | None = None
    detail_failures: int = 0
    superseded: bool = False
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None


RecordListener = Callable[[CycleUpdate], None]


class RefreshOrchestrator:
    """Sequences fetches and processing, publishing incremental records."""

    def __init__(
        self,
        client: GiftCardClient | None = None,
        listeners: list[RecordListener] | None = None,
    ) -> None:
        self.client = client or GiftCardClient()
        self._listeners: list[RecordListener] = list(listeners or [])
        self._generation = 0
        self._state = CycleState.IDLE
        self._records: tuple[ProcessedRecord, ...] = ()

    # ── Public state ─────────────────────────────────────

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def records(self) -> tuple[ProcessedRecord, ...]:
        return self._records

    def subscribe(self, listener: RecordListener) -> None:
        """Register a callback invoked on every publish."""
        self._listeners.append(listener)

    # ── Private helpers ──────────────────────────────────

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _publish(
        self,
        generation: int,
        state: CycleState,
        records: tuple[ProcessedRecord, ...],
        settled: int = 0,
        total: int = 0,
        error: str | None = None,
    ) -> bool:
        """Commit state and records, then notify listeners.

        Returns False (and changes nothing) when *generation* is stale.
        """
        if not self._is_current(generation):
            logger.debug(
                "Dropped %s update from stale cycle %d (current %d)",
                state.value,
                generation,
                self._generation,
            )
            return False

        self._state = state
        self._records = records
        update = CycleUpdate(
            generation=generation,
            state=state,
            records=records,
            details_settled=settled,
            details_total=total,
            error=error,
        )
        for listener in self._listeners:
            try:
                listener(update)
            except Exception:
                logger.error(
                    "Record listener %r raised", listener, exc_info=True
                )
        return True

    async def _fetch_catalog(
        self,
    ) -> tuple[list[RawProduct], DataProcessor]:
        """Fetch catalog and FX concurrently; both must succeed."""
        outcomes = await asyncio.gather(
            self.client.get_gift_cards(),
            self.client.get_fx_rates(),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        products, fx_rates = outcomes
        processor = DataProcessor(fx_rates, self.client.currency)
        return products, processor

    # ── Refresh cycle ────────────────────────────────────

    async def refresh(self) -> CycleResult:
        """Run one full refresh cycle and return its outcome."""
        self._generation += 1
        generation = self._generation
        result = CycleResult(generation=generation)
        logger.info("Refresh cycle %d started", generation)

        self._publish(generation, CycleState.FETCHING_CATALOG, ())
        try:
            products, processor = await self._fetch_catalog()
        except GiftCardMonitorError as exc:
            logger.error(
                "Refresh cycle %d failed: %s", generation, exc, exc_info=True
            )
            result.state = CycleState.FAILED
            result.error = str(exc)
            result.superseded = not self._publish(
                generation, CycleState.FAILED, (), error=result.error
            )
            result.finished_at = datetime.now()
            return result

        result.local_per_usd = processor.local_per_usd
        if not self._is_current(generation):
            logger.info("Refresh cycle %d superseded", generation)
            result.superseded = True
            result.finished_at = datetime.now()
            return result

        snapshot = tuple(processor.process(p) for p in products)
        index = {r.product_id: i for i, r in enumerate(snapshot)}
        total = len(products)
        self._publish(
            generation, CycleState.PROCESSING_BASIC, snapshot, 0, total
        )

        settled = 0
        semaphore = asyncio.Semaphore(Settings.MAX_CONCURRENT_DETAILS)
        self._publish(
            generation, CycleState.FETCHING_DETAILS, snapshot, 0, total
        )

        async def resolve_one(product: RawProduct) -> None:
            nonlocal snapshot, settled
            detail: ProductDetail | None = None
            try:
                async with semaphore:
                    detail = await self.client.get_product_details(
                        product.product_id
                    )
            except PartialDetailError as exc:
                result.detail_failures += 1
                logger.warning(
                    "Commission unavailable for '%s': %s",
                    product.name,
                    exc,
                )
            finally:
                settled += 1

            if detail is not None:
                records = list(snapshot)
                records[index[product.product_id]] = processor.process(
                    product, detail
                )
                snapshot = tuple(records)
            self._publish(
                generation,
                CycleState.FETCHING_DETAILS,
                snapshot,
                settled,
                total,
            )

        outcomes = await asyncio.gather(
            *(resolve_one(p) for p in products),
            return_exceptions=True,
        )
        for product, outcome in zip(products, outcomes):
            if isinstance(outcome, Exception):
                result.detail_failures += 1
                logger.error(
                    "Unexpected error resolving '%s': %s",
                    product.name,
                    outcome,
                    exc_info=outcome,
                )

        result.records = snapshot
        result.state = CycleState.SETTLED
        result.superseded = not self._publish(
            generation, CycleState.SETTLED, snapshot, settled, total
        )
        result.finished_at = datetime.now()
        logger.info(
            "Refresh cycle %d settled: %d products, %d detail failures",
            generation,
            total,
            result.detail_failures,
        )
        return result
