"""
Status poller for a submitted transcription order.

States: processing -> complete | error (terminal), or cancelled when the
owning view replaces or discards the poller. The order id is bound at
construction, so every request targets the order that was just submitted.
"""

import logging
import time
from collections.abc import Callable, Iterator
from enum import StrEnum

from pydantic import ValidationError

from src.core.exceptions import APIError
from src.core.models import StatusResponse
from src.core.utils import format_number

logger = logging.getLogger(__name__)

PROCESSING_TEXT = "Processing..."
COMPLETE_TEXT = "Transcription complete!"
STATUS_ERROR_TEXT = "Error fetching status"

# Streamlit fragment timers fire slightly early or late; a tick that lands
# within this many seconds of its due time still counts.
_TIMER_SLACK = 0.25


class PollState(StrEnum):
    """Observable states of a status poller."""

    processing = "processing"
    complete = "complete"
    error = "error"
    cancelled = "cancelled"


class StatusPoller:
    """Fixed-interval status checks for one order, until a terminal state."""

    def __init__(
        self,
        client,
        order_id: str,
        interval: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self.order_id = order_id
        self.interval = interval
        self._clock = clock
        self._next_due = clock() + interval
        self.state = PollState.processing
        self.message = PROCESSING_TEXT

    @property
    def done(self) -> bool:
        return self.state != PollState.processing

    def cancel(self) -> None:
        """Stop polling without changing the displayed message."""
        if not self.done:
            logger.info("Status polling for order %s cancelled", self.order_id)
            self.state = PollState.cancelled

    def tick(self) -> str:
        """Issue one status request and return the message to display.

        A terminal poller returns its last message without any request.
        """
        if self.done:
            return self.message

        try:
            body = self._client.get_status(self.order_id)
            status = StatusResponse.model_validate(body)
        except (APIError, ValidationError) as exc:
            logger.error("Status check for order %s failed: %s", self.order_id, exc)
            self.state = PollState.error
            self.message = STATUS_ERROR_TEXT
            return self.message

        if status.completed:
            logger.info("Transcription order %s completed", self.order_id)
            self.state = PollState.complete
            self.message = COMPLETE_TEXT
        elif status.estimated_time is not None:
            self.message = (
                f"{PROCESSING_TEXT} Estimated time remaining: "
                f"{format_number(status.estimated_time)} seconds"
            )
        else:
            self.message = PROCESSING_TEXT
        return self.message

    def poll_if_due(self) -> str:
        """Tick only when ``interval`` seconds have passed since the last tick.

        Used by the UI timer, whose callback can also run on unrelated
        page interactions.
        """
        now = self._clock()
        if not self.done and now + _TIMER_SLACK >= self._next_due:
            self._next_due = now + self.interval
            return self.tick()
        return self.message

    def run(self, sleep: Callable[[float], None] = time.sleep) -> Iterator[str]:
        """Yield the initial message, then one message per interval until terminal."""
        yield self.message
        while not self.done:
            sleep(self.interval)
            if self.done:
                break
            yield self.tick()
