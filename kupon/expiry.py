"""Countdown until a coupon code expires."""

from __future__ import annotations

import asyncio
import enum
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

logger = logging.getLogger(__name__)

EXPIRED_TEXT = "00:00"


class ExpiryState(enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_remaining(expires_at: datetime, now: datetime) -> str:
    """Format the time left as zero-padded ``MM:SS``.

    Minutes are not wrapped at an hour, so 48 hours reads ``2880:00``.
    Returns ``"00:00"`` once ``now`` reaches ``expires_at``.
    """
    remaining_ms = (expires_at - now) // timedelta(milliseconds=1)
    if remaining_ms <= 0:
        return EXPIRED_TEXT
    minutes = remaining_ms // 60000
    seconds = (remaining_ms % 60000) // 1000
    return f"{minutes:02d}:{seconds:02d}"


class ExpiryTracker:
    """Live countdown for one ``expires_at`` value.

    ``start()`` emits the current text immediately and then once every
    ``interval`` seconds through an APScheduler interval job on the running
    event loop. ``stop()`` releases the scheduler; nothing is emitted after
    it returns. Use ``async with tracker:`` to tie the timer to a scope.
    """

    def __init__(
        self,
        expires_at: datetime,
        on_tick: Callable[[str], None] | None = None,
        *,
        interval: float = 1.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval harus lebih besar dari 0: {interval}")
        self._expires_at = expires_at
        self._on_tick = on_tick
        self._interval = interval
        self._clock = clock or _utcnow
        self._scheduler = None
        self._running = False
        self.last_text: str | None = None
        self.last_state: ExpiryState | None = None

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @property
    def running(self) -> bool:
        return self._running

    def remaining(self, now: datetime | None = None) -> timedelta:
        now = now or self._clock()
        return max(self._expires_at - now, timedelta(0))

    def state(self, now: datetime | None = None) -> ExpiryState:
        now = now or self._clock()
        if now < self._expires_at:
            return ExpiryState.ACTIVE
        return ExpiryState.EXPIRED

    def tick(self) -> str:
        """Recompute the countdown and emit it to ``on_tick``."""
        now = self._clock()
        self.last_state = self.state(now)
        self.last_text = format_remaining(self._expires_at, now)
        if self._on_tick is not None:
            self._on_tick(self.last_text)
        return self.last_text

    def reset(self, expires_at: datetime) -> None:
        """Track a new expiry, e.g. after the code was refreshed."""
        self._expires_at = expires_at
        logger.info("Hitung mundur diatur ulang ke %s", expires_at.isoformat())
        if self._running:
            self.tick()

    def start(self) -> None:
        """Start ticking. Must be called from a running event loop.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        if self._running:
            return
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.interval import IntervalTrigger
        except ImportError:
            raise ImportError(
                "apscheduler diperlukan: pip install 'apscheduler<4'"
            )

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._job_tick,
            trigger=IntervalTrigger(seconds=self._interval),
            id="expiry_tick",
            name="Hitung mundur kupon",
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        self._running = True
        try:
            self.tick()
        except Exception:
            self.stop()
            raise
        logger.debug("Hitung mundur dimulai (interval %.2fs)", self._interval)

    def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        if not self._running:
            return
        self._running = False
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
        logger.debug("Hitung mundur dihentikan")

    async def _job_tick(self) -> None:
        if not self._running:
            return
        try:
            self.tick()
        except Exception:
            logger.exception("Kesalahan saat memperbarui hitung mundur")

    async def __aenter__(self) -> ExpiryTracker:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.stop()


async def watch(
    expires_at: datetime,
    on_tick: Callable[[str], None],
    *,
    interval: float = 1.0,
    clock: Callable[[], datetime] | None = None,
) -> None:
    """Emit the countdown until the code expires or the task is cancelled."""
    expired = asyncio.Event()

    def emit(text: str) -> None:
        on_tick(text)
        if tracker.last_state is ExpiryState.EXPIRED:
            expired.set()

    tracker = ExpiryTracker(expires_at, emit, interval=interval, clock=clock)
    async with tracker:
        await expired.wait()
