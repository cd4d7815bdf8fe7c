"""
Global SKU quick-search.

Input is debounced; each dispatched lookup gets a sequence number and its
response is applied only while that number is still the latest one. Older
requests are never aborted, their results are just dropped.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Set

from pricebook_web.api_client import CatalogClient, StoreError
from pricebook_web.config import settings
from pricebook_web.models import ProductSearchResult

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No product found for that SKU."


class MessageKind(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass
class SkuSearchState:
    query: str = ""
    searching: bool = False
    message: str = ""
    message_kind: Optional[MessageKind] = None
    result: Optional[ProductSearchResult] = None


def normalize_sku(text: str) -> str:
    return text.strip().upper()


class SkuSearch:
    def __init__(
        self,
        client: CatalogClient,
        delay: Optional[float] = None,
        on_change: Optional[Callable[[SkuSearchState], Any]] = None,
    ):
        self.client = client
        self.delay = settings.SKU_DEBOUNCE_SECONDS if delay is None else delay
        self.on_change = on_change
        self.state = SkuSearchState()
        self._seq = 0
        self._timer: Optional[asyncio.Task] = None
        self._requests: Set[asyncio.Task] = set()

    def on_input(self, text: str) -> None:
        """Handles a change of the search field."""
        self.state.query = text
        self._cancel_timer()

        if not text.strip():
            # Invalidate anything still in flight
            self._seq += 1
            self._update(searching=False, message="", message_kind=None, result=None)
            return

        self._timer = asyncio.get_running_loop().create_task(self._debounce(text))

    def clear(self) -> None:
        self.on_input("")

    async def dispatch(self, text: str) -> None:
        """Sends one lookup now and applies its outcome if still current."""
        self._seq += 1
        seq = self._seq
        self._update(searching=True, message="", message_kind=None, result=None)

        try:
            result = await self.client.find_by_sku(normalize_sku(text))
        except StoreError as e:
            if seq != self._seq:
                return
            logger.error(f"SKU lookup failed for {text!r}: {e}")
            self._update(searching=False, message=e.message, message_kind=MessageKind.ERROR)
            return

        if seq != self._seq:
            logger.debug(f"Dropping stale SKU response #{seq} (latest #{self._seq})")
            return

        if result is None:
            self._update(
                searching=False, message=NOT_FOUND_MESSAGE, message_kind=MessageKind.INFO
            )
        else:
            self._update(searching=False, result=result)

    async def settle(self) -> None:
        """Waits for the pending debounce timer and all in-flight lookups."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._requests:
            await asyncio.gather(*self._requests, return_exceptions=True)

    async def _debounce(self, text: str) -> None:
        await asyncio.sleep(self.delay)
        # Run the request in its own task so a later keystroke cancelling
        # the timer does not abort it
        task = asyncio.get_running_loop().create_task(self.dispatch(text))
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)
        self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _update(self, **changes) -> None:
        for key, value in changes.items():
            setattr(self.state, key, value)
        if self.on_change is not None:
            self.on_change(self.state)
