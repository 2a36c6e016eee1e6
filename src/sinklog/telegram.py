"""
Telegram sink: non-blocking, queued delivery of log messages to a chat via
the Telegram Bot API.

``log`` only enqueues. A single background task owned by the sink probes the
bot once on setup and then drains the queue one message per tick, so delivery
is serialized, rate-limited and FIFO. Delivery is at-most-once: a message whose
POST fails is reported through diagnostics and dropped.

Known limitation: if the initial ``getMe`` probe fails the sink stays
disconnected for its whole lifetime and never re-probes; queued messages
accumulate until the sink is destroyed.
"""

from __future__ import annotations

import asyncio
import contextlib
import html
from collections import deque
from typing import Any

import httpx

from .diagnostics import get_diagnostics_logger
from .exceptions import MissingCredentials
from .levels import LevelName
from .record import LogRecord
from .sinks import BaseSink

diagnostics = get_diagnostics_logger("sinklog.telegram")

TELEGRAM_API_BASE = "https://api.telegram.org"
DEFAULT_DRAIN_INTERVAL = 0.1


class TelegramSink(BaseSink):
    def __init__(
        self,
        level: LevelName | int = "NOTSET",
        *,
        bot_token: str,
        chat_id: str | int,
        project_name: str | None = None,
        drain_interval: float = DEFAULT_DRAIN_INTERVAL,
        api_base: str = TELEGRAM_API_BASE,
        client: httpx.AsyncClient | None = None,
        **options: Any,
    ) -> None:
        super().__init__(level, **options)
        self._bot_token = bot_token
        self._chat_id = str(chat_id) if chat_id is not None else ""
        self._project_name = project_name or None
        self._drain_interval = drain_interval
        self._api_base = api_base.rstrip("/")

        self._client = client
        self._owns_client = client is None
        self._task: asyncio.Task[None] | None = None

        self._queue: deque[str] = deque()
        self._connected = False
        self._in_flight = False

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def pending(self) -> list[str]:
        return list(self._queue)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def _open(self) -> None:
        if not self._bot_token:
            raise MissingCredentials(field="bot_token")
        if not self._chat_id:
            raise MissingCredentials(field="chat_id")

        if self._client is None:
            self._client = httpx.AsyncClient()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="sinklog-telegram-drain")

    async def _close(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        if self._queue:
            diagnostics.warning("telegram_queue_dropped", pending=len(self._queue))
            self._queue.clear()
        self._connected = False

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def flush(self) -> None:
        """Drain the queue now, one message per tick. No-op while disconnected."""
        while self._connected and (self._queue or self._in_flight):
            if not await self.drain_once():
                await asyncio.sleep(self._drain_interval)

    # -------------------------------------------------------------------------
    # Formatting / Enqueue
    # -------------------------------------------------------------------------

    def format(self, record: LogRecord) -> str:
        msg = f"<pre>{html.escape(super().format(record), quote=False)}</pre>"

        if self._project_name:
            msg = f"{self._project_name}\n{msg}"

        return msg

    def log(self, msg: str) -> None:
        # the drain task picks this up on its next tick
        self._queue.append(msg)

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    async def _run(self) -> None:
        if not await self.probe():
            return

        while True:
            await asyncio.sleep(self._drain_interval)
            try:
                await self.drain_once()
            except Exception:
                diagnostics.exception("telegram_drain_failed")

    async def probe(self) -> bool:
        """Check the bot token against ``getMe``; mark the sink connected on success."""
        try:
            response = await self._http().get(self._api_url("getMe"))
        except httpx.HTTPError as exc:
            diagnostics.error("telegram_probe_failed", error=str(exc))
            return False

        if response.status_code != 200:
            diagnostics.error(
                "telegram_probe_failed",
                status_code=response.status_code,
                error="bot_token is invalid",
            )
            return False

        self._connected = True
        return True

    async def drain_once(self) -> bool:
        """Deliver at most one queued message. Returns whether a delivery was attempted."""
        if self._in_flight or not self._queue or not self._connected:
            return False

        msg = self._queue.popleft()
        self._in_flight = True
        try:
            await self._deliver(msg)
        finally:
            self._in_flight = False
        return True

    async def _deliver(self, msg: str) -> None:
        form = {
            "chat_id": (None, self._chat_id),
            "text": (None, msg),
            "parse_mode": (None, "HTML"),
        }
        try:
            response = await self._http().post(self._api_url("sendMessage"), files=form)
        except httpx.HTTPError as exc:
            diagnostics.error("telegram_delivery_failed", error=str(exc))
            return

        if response.is_error:
            diagnostics.error(
                "telegram_delivery_failed",
                status_code=response.status_code,
                error=response.text[:200],
            )

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    def _api_url(self, method: str) -> str:
        return f"{self._api_base}/bot{self._bot_token}/{method}"
