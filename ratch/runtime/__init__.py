"""Runtime package: main loop and application wiring."""

from .app import WatchOptions, run_watch
from .loop import LoopClock, RuntimeLoopTiming, run_main_loop

__all__ = ["LoopClock", "RuntimeLoopTiming", "WatchOptions", "run_main_loop", "run_watch"]
