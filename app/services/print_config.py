import asyncio
from typing import Any, Optional

import httpx

from app.clients.backend import BackendClient
from app.core.config import settings
from app.core.logger import logger


class PrintConfigRefresher:
    """
    Keeps the "minutes after clinic end" grace period in memory and reloads
    it from the backend configuration endpoint on a fixed interval.

    A failed reload keeps the previous value. The print guard only ever sees
    ``value``.
    """

    def __init__(
        self,
        client: BackendClient,
        key: str = settings.PRINT_CONFIG_KEY,
        default: int = settings.PRINT_MINUTES_AFTER_CLINIC_END,
        interval_seconds: float = settings.PRINT_CONFIG_REFRESH_SECONDS,
    ):
        self.client = client
        self.key = key
        self.interval_seconds = interval_seconds
        self.value = default
        self._task: Optional[asyncio.Task] = None

    @staticmethod
    def _coerce(raw: Any) -> Optional[int]:
        if isinstance(raw, bool):
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return None
        return value if value >= 0 else None

    async def refresh(self) -> int:
        try:
            entry = await self.client.get_configuration(self.key)
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers a configuration entry that fails validation
            logger.warning(f"Failed to load print configuration, keeping {self.value} minutes: {exc}")
            return self.value

        if entry is None or not entry.is_active:
            logger.warning(f"Print configuration {self.key!r} not found, keeping {self.value} minutes")
            return self.value

        new_value = self._coerce(entry.value)
        if new_value is None:
            logger.warning(f"Invalid print configuration value {entry.value!r}, keeping {self.value} minutes")
        elif new_value != self.value:
            logger.info(f"Updated print configuration - minutes after clinic end: {new_value}")
            self.value = new_value
        return self.value

    async def _run(self):
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
