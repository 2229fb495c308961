"""
Cosmetic upload progress.

The percentage is a synthetic heartbeat: it creeps toward a ceiling while
a gateway call is in flight and only reaches 100 once the call succeeds.
It is not derived from bytes transferred.
"""
import asyncio
import contextlib
from dataclasses import dataclass
from typing import Callable, List, Optional

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True)
class ProgressConfig:
    """
    Timing of the progress heartbeat.
    
    Attributes:
        tick_interval: Seconds between ticks
        tick_step: Percentage added per tick
        tick_ceiling: Highest value ticks may reach (below 100)
        reset_delay: Seconds to wait after an upload before resetting to 0
    """
    tick_interval: float = 0.1
    tick_step: int = 10
    tick_ceiling: int = 90
    reset_delay: float = 1.0
    
    def __post_init__(self):
        if not 0 <= self.tick_ceiling < 100:
            raise ValueError("tick_ceiling must be in [0, 100)")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.tick_step < 0:
            raise ValueError("tick_step must be >= 0")
        if self.reset_delay < 0:
            raise ValueError("reset_delay must be >= 0")


class ProgressTracker:
    """
    Owns one progress value in [0, 100] and notifies listeners on change.
    
    Example:
        >>> tracker = ProgressTracker()
        >>> tracker.advance()
        10
        >>> tracker.complete()
        100
    """
    
    def __init__(self, config: Optional[ProgressConfig] = None):
        self._config = config or ProgressConfig()
        self._value = 0
        self._listeners: List[ProgressCallback] = []
        self._ticker: Optional[asyncio.Task] = None
        self._reset_handle: Optional[asyncio.TimerHandle] = None
    
    @property
    def value(self) -> int:
        """Current percentage."""
        return self._value
    
    @property
    def config(self) -> ProgressConfig:
        return self._config
    
    @property
    def is_ticking(self) -> bool:
        """Returns True while the heartbeat task is running."""
        return self._ticker is not None and not self._ticker.done()
    
    def on(self, callback: ProgressCallback) -> 'ProgressTracker':
        """Registers a listener."""
        self._listeners.append(callback)
        return self
    
    def off(self, callback: Optional[ProgressCallback] = None) -> 'ProgressTracker':
        """Removes one listener, or all of them when callback is None."""
        if callback is None:
            self._listeners.clear()
        else:
            self._listeners = [cb for cb in self._listeners if cb != callback]
        return self
    
    def _set(self, value: int) -> int:
        if value != self._value:
            self._value = value
            for callback in list(self._listeners):
                callback(value)
        return self._value
    
    def advance(self, step: Optional[int] = None) -> int:
        """Move forward by one tick, never past the ceiling and never backwards."""
        step = self._config.tick_step if step is None else step
        target = min(self._value + step, self._config.tick_ceiling)
        if target > self._value:
            self._set(target)
        return self._value
    
    def complete(self) -> int:
        """Mark the upload finished."""
        return self._set(100)
    
    def reset(self) -> int:
        """Return to 0."""
        return self._set(0)
    
    def start(self, ticking: bool = True) -> None:
        """
        Begin a new upload: cancel any pending reset, go to 0 and
        optionally start the heartbeat.
        """
        self.cancel_scheduled_reset()
        self._cancel_ticker()
        self.reset()
        if ticking:
            self._ticker = asyncio.get_running_loop().create_task(self._tick())
    
    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self._config.tick_interval)
            self.advance()
    
    def _cancel_ticker(self) -> None:
        if self._ticker is not None and not self._ticker.done():
            self._ticker.cancel()
    
    async def stop_ticking(self) -> None:
        """Stop the heartbeat and wait for it to finish."""
        ticker, self._ticker = self._ticker, None
        if ticker is None:
            return
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker
    
    def schedule_reset(self, delay: Optional[float] = None) -> None:
        """Reset to 0 after ``delay`` seconds (defaults to config.reset_delay)."""
        self.cancel_scheduled_reset()
        delay = self._config.reset_delay if delay is None else delay
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(delay, self.reset)
    
    def cancel_scheduled_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
