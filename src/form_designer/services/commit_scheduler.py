"""Debounces rapid text edits into single committed mutations"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 1.0

# (field_id, property) - e.g. ("l2x9...", "label") or ("l2x9...", "option:1")
StreamKey = Tuple[str, str]


def option_stream(field_id: str, index: int) -> StreamKey:
    return (field_id, f"option:{index}")


@dataclass
class PendingCommit:
    handle: asyncio.TimerHandle
    commit: Callable[[Any], None]
    value: Any


class CommitScheduler:
    """
    Keeps at most one pending commit per edit stream.

    Each raw input event replaces the stream's pending commit and restarts its
    quiet period; only the value present when the period elapses is committed.
    Streams are independent, so typing in one editor never cancels a pending
    commit of another.

    Must be used from the thread running the event loop.
    """

    def __init__(
        self,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Args:
            quiet_period: Seconds of inactivity before a pending edit commits
            loop: Event loop for timers (default: the running loop at schedule time)
        """
        self.quiet_period = quiet_period
        self._loop = loop
        self._pending: Dict[StreamKey, PendingCommit] = {}

    def schedule(self, stream: StreamKey, commit: Callable[[Any], None], value: Any) -> None:
        """Replace any pending commit on this stream with one for the new value"""
        self.cancel(stream)
        loop = self._loop or asyncio.get_running_loop()
        handle = loop.call_later(self.quiet_period, self._fire, stream)
        self._pending[stream] = PendingCommit(handle=handle, commit=commit, value=value)

    def _fire(self, stream: StreamKey) -> None:
        pending = self._pending.pop(stream, None)
        if pending is None:
            return
        logger.debug(f"Committing debounced edit on {stream}")
        pending.commit(pending.value)

    def cancel(self, stream: StreamKey) -> bool:
        """Drop the pending commit on a stream without applying it"""
        pending = self._pending.pop(stream, None)
        if pending is None:
            return False
        pending.handle.cancel()
        return True

    def cancel_field(self, field_id: str) -> int:
        streams = [s for s in self._pending if s[0] == field_id]
        for stream in streams:
            self.cancel(stream)
        if streams:
            logger.debug(f"Discarded {len(streams)} pending edits for field {field_id}")
        return len(streams)

    def flush(self, stream: Optional[StreamKey] = None) -> int:
        """
        Commit pending edits immediately.

        Args:
            stream: The stream to flush; all streams when omitted

        Returns:
            Number of edits committed
        """
        streams = list(self._pending) if stream is None else [stream]
        flushed = 0
        for key in streams:
            pending = self._pending.get(key)
            if pending is None:
                continue
            pending.handle.cancel()
            self._fire(key)
            flushed += 1
        return flushed

    def flush_field(self, field_id: str) -> int:
        flushed = 0
        for stream in [s for s in self._pending if s[0] == field_id]:
            flushed += self.flush(stream)
        return flushed

    def is_pending(self, stream: StreamKey) -> bool:
        return stream in self._pending

    def pending_streams(self) -> List[StreamKey]:
        return list(self._pending)
