"""
session.py

Tail session controller for tailscan.

A TailSession polls one source file for a fixed duration, copies every
new byte range into the sink of the current rotation epoch and decides
when the producer has rotated the file. Rotation is never observed
directly; it is inferred from two heuristics:

* size: the file has stopped growing and what we consumed is already
  at or past the size ceiling;
* staleness: too many consecutive polls found nothing new.

Either one resets the read offset to 0 and opens a new rotation epoch.
"""

import math
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional

from .errors import TailError
from .reader import read_increment
from .sink import append_to_sink

MEGABYTE = 1024 * 1024


class PollOutcome(str, Enum):
    READ = "read"
    STALE = "stale"
    ROTATED_SIZE = "rotated-size"
    ROTATED_STALE = "rotated-stale"

    @property
    def rotated(self) -> bool:
        return self in (PollOutcome.ROTATED_SIZE, PollOutcome.ROTATED_STALE)


@dataclass(frozen=True)
class SessionSettings:
    duration: float = 0
    interval: float = 10
    size_ceiling: int = 1 * MEGABYTE
    stale_ceiling: int = 5

    def __post_init__(self):
        for name, value in (("duration", self.duration), ("interval", self.interval),
                            ("size ceiling", self.size_ceiling),
                            ("stale ceiling", self.stale_ceiling)):
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
        if self.interval <= 0:
            raise ValueError(f"interval must be > 0, got {self.interval}")
        if self.size_ceiling < 0:
            raise ValueError(f"size ceiling must be >= 0, got {self.size_ceiling}")
        if self.stale_ceiling < 0:
            raise ValueError(f"stale ceiling must be >= 0, got {self.stale_ceiling}")


@dataclass
class SessionState:
    offset: int = 0
    rotation_count: int = 0
    stale_read_count: int = 0


@dataclass
class SessionSummary:
    polls: int
    bytes_copied: int
    elapsed: float
    state: SessionState
    sinks: List[str] = field(default_factory=list)

    @property
    def rotations(self) -> int:
        return self.state.rotation_count


class TailSession:
    """
    Controller for one bounded tail session.

    The session state belongs to this object alone and is only touched
    from poll_once(), so polls never overlap and need no locking.
    """

    def __init__(
        self,
        path: str,
        settings: Optional[SessionSettings] = None,
        notifier=None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.path = path
        self.settings = settings or SessionSettings()
        self.notifier = notifier
        self.state = SessionState()
        self.polls = 0
        self.bytes_copied = 0
        self.sinks: List[str] = []
        self._clock = clock
        self._sleep = sleep

    # ---------------------------------------------------------------------
    # SINGLE POLL
    # ---------------------------------------------------------------------
    def poll_once(self) -> PollOutcome:
        """
        Run one poll: read, apply rotation policy, forward new bytes.

        Raises SourceReadError or SinkWriteError; neither is retried here.
        """
        state = self.state
        self.polls += 1
        print(f"[tailscan] Poll #{self.polls} offset: {state.offset}")

        result = read_increment(self.path, state.offset)

        if result.offset == state.offset:
            print("[tailscan] No new data in file")
            state.stale_read_count += 1
            if state.offset >= self.settings.size_ceiling:
                return self._rotate(PollOutcome.ROTATED_SIZE)
            if state.stale_read_count >= self.settings.stale_ceiling:
                state.stale_read_count = 0
                return self._rotate(PollOutcome.ROTATED_STALE)
            return PollOutcome.STALE

        state.stale_read_count = 0
        print(
            f"[tailscan] Read {result.size} bytes, cost {result.cost * 1000:.0f}ms, "
            f"update offset: {state.offset} -> {result.offset}"
        )
        # Offset moves before the write lands; a failed write loses these bytes.
        state.offset = result.offset

        sink = append_to_sink(self.path, state.rotation_count, result.data)
        self.bytes_copied += result.size
        if sink not in self.sinks:
            self.sinks.append(sink)
        return PollOutcome.READ

    def _rotate(self, outcome: PollOutcome) -> PollOutcome:
        state = self.state
        previous = state.offset
        state.offset = 0
        state.rotation_count += 1
        if outcome is PollOutcome.ROTATED_SIZE:
            reason = f"offset {previous} reached size ceiling {self.settings.size_ceiling}"
        else:
            reason = f"no new data after {self.settings.stale_ceiling} polls"
        print(f"[tailscan] Rotation #{state.rotation_count} detected ({reason}), reset offset")
        if self.notifier is not None:
            self.notifier.rotation(self.path, state, reason)
        return outcome

    # ---------------------------------------------------------------------
    # SESSION LOOP
    # ---------------------------------------------------------------------
    def run(self) -> SessionSummary:
        """
        Poll until the session duration has elapsed.

        The first poll happens immediately, later ones on a fixed
        schedule of `interval` seconds from the session start. A poll
        that overruns skips the ticks it missed. When the deadline and a
        tick coincide the deadline wins.
        """
        settings = self.settings
        start = self._clock()
        deadline = start + settings.duration
        tick = 0

        print(
            f"[tailscan] Session started on {self.path} "
            f"(duration {settings.duration}s, interval {settings.interval}s)"
        )
        while True:
            try:
                self.poll_once()
            except TailError as e:
                if self.notifier is not None:
                    self.notifier.failure(self.path, e)
                raise

            now = self._clock()
            if now >= deadline:
                break

            tick += 1
            next_tick = start + tick * settings.interval
            if next_tick <= now:
                tick = int((now - start) // settings.interval) + 1
                next_tick = start + tick * settings.interval

            if deadline <= next_tick:
                self._sleep(deadline - now)
                break
            self._sleep(next_tick - now)

        elapsed = self._clock() - start
        print(
            f"[tailscan] Session finished after {elapsed:.1f}s: {self.polls} polls, "
            f"{self.bytes_copied} bytes copied, {self.state.rotation_count} rotations"
        )
        return SessionSummary(
            polls=self.polls,
            bytes_copied=self.bytes_copied,
            elapsed=elapsed,
            state=replace(self.state),
            sinks=list(self.sinks),
        )
