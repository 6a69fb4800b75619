"""Incremental reveal of a growing message.

The scheduler itself is a plain tick function: each :meth:`RevealScheduler.advance`
call exposes at most ``chunk_size`` more characters of the source. Any clock
can drive it; :func:`reveal_stream` is the asyncio driver used by the API.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterable, AsyncIterator, Awaitable, Callable

from .document_models import RenderedMessage
from .exceptions import RevealError
from .pipeline import render_message

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 5
DEFAULT_INTERVAL = 0.02


class RevealPhase(str, Enum):
    IDLE = "idle"
    REVEALING = "revealing"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class RevealState:
    visible_prefix_length: int
    done: bool


class RevealScheduler:
    """Expose a monotonically growing source in fixed-size increments."""

    def __init__(
        self,
        source: str = "",
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        suggestions_enabled: bool = True,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be a positive integer")
        self._source = source
        self._chunk_size = chunk_size
        self._suggestions_enabled = suggestions_enabled
        self._visible = 0
        self._final = False
        self._cancelled = False
        self._phase = RevealPhase.IDLE

    # ------------------------------------------------------------------
    @property
    def source(self) -> str:
        return self._source

    @property
    def phase(self) -> RevealPhase:
        return self._phase

    @property
    def is_final(self) -> bool:
        return self._final

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def visible_text(self) -> str:
        return self._source[: self._visible]

    @property
    def state(self) -> RevealState:
        return RevealState(
            visible_prefix_length=self._visible,
            done=self._phase is RevealPhase.COMPLETE,
        )

    # ------------------------------------------------------------------
    def append(self, delta: str) -> None:
        """Grow the source by ``delta``."""

        self.update(self._source + delta)

    def update(self, source: str) -> None:
        """Replace the source with a longer version of itself."""

        if self._final and source != self._source:
            raise RevealError("Source was marked final and can no longer grow")
        if not source.startswith(self._source):
            raise RevealError("New source does not extend the current source")
        self._source = source

    def mark_final(self) -> None:
        """Signal that the source will not grow any further."""

        self._final = True

    def cancel(self) -> None:
        """Stop revealing; later ticks leave the state untouched."""

        if not self._cancelled:
            logger.debug("Reveal cancelled at %s/%s", self._visible, len(self._source))
        self._cancelled = True

    def advance(self) -> RevealState:
        """Run one tick and return the resulting state."""

        if self._cancelled or self._phase is RevealPhase.COMPLETE:
            return self.state
        self._visible = min(self._visible + self._chunk_size, len(self._source))
        self._phase = RevealPhase.REVEALING
        if self._final and self._visible == len(self._source):
            self._phase = RevealPhase.COMPLETE
        return self.state

    def render(self) -> RenderedMessage:
        """Parse the currently visible prefix from scratch."""

        return render_message(
            self.visible_text,
            streaming=self._phase is not RevealPhase.COMPLETE,
            suggestions_enabled=self._suggestions_enabled,
        )


@dataclass(frozen=True, slots=True)
class RevealFrame:
    state: RevealState
    message: RenderedMessage


Sleep = Callable[[float], Awaitable[object]]


async def reveal_stream(
    chunks: AsyncIterable[str],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    interval: float = DEFAULT_INTERVAL,
    suggestions_enabled: bool = True,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[RevealFrame]:
    """Reveal ``chunks`` as they arrive, one frame per visible change.

    A feeder task appends incoming chunks and marks the source final once the
    iterable is exhausted. Closing the generator cancels the feeder; errors
    raised by ``chunks`` are re-raised here.
    """

    scheduler = RevealScheduler(chunk_size=chunk_size, suggestions_enabled=suggestions_enabled)

    async def pump() -> None:
        async for chunk in chunks:
            if chunk:
                scheduler.append(chunk)
        scheduler.mark_final()

    feeder = asyncio.create_task(pump())
    last_length = -1
    try:
        while True:
            await sleep(interval)
            if feeder.done() and not feeder.cancelled():
                error = feeder.exception()
                if error is not None:
                    raise error
            state = scheduler.advance()
            if state.visible_prefix_length != last_length or state.done:
                last_length = state.visible_prefix_length
                yield RevealFrame(state=state, message=scheduler.render())
            if state.done:
                break
    finally:
        scheduler.cancel()
        if not feeder.done():
            feeder.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await feeder


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_INTERVAL",
    "RevealFrame",
    "RevealPhase",
    "RevealScheduler",
    "RevealState",
    "reveal_stream",
]
