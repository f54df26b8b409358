# src/terminal_shell/core/loop_runner.py
from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Coroutine, Optional

_MAIN_LOOP: Optional[asyncio.AbstractEventLoop] = None
_THREAD: Optional[threading.Thread] = None


def ensure_background_loop() -> asyncio.AbstractEventLoop:
    """
    Ensures a persistent asyncio event loop is running on a background thread
    and returns it. If the loop is already running, it is returned as is.
    """
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is not None:
        return _MAIN_LOOP

    loop = asyncio.new_event_loop()

    def _run_loop(loop_: asyncio.AbstractEventLoop) -> None:
        """Sets the loop and runs it until stop() is called."""
        asyncio.set_event_loop(loop_)
        loop_.run_forever()

    # Start the loop in a dedicated, daemonized thread
    t = threading.Thread(target=_run_loop, args=(loop,), name="terminal-shell-loop", daemon=True)
    t.start()

    _MAIN_LOOP = loop
    _THREAD = t
    return loop


def submit_on_main_loop(coro: Coroutine[Any, Any, Any]) -> Future:
    """
    Schedules a coroutine on the background loop without waiting for it.
    Several submitted coroutines run concurrently.
    """
    loop = ensure_background_loop()
    return asyncio.run_coroutine_threadsafe(coro, loop)


def stop_background_loop() -> None:
    """Stops the background loop; pending jobs are abandoned."""
    global _MAIN_LOOP, _THREAD
    if _MAIN_LOOP is None:
        return
    _MAIN_LOOP.call_soon_threadsafe(_MAIN_LOOP.stop)
    if _THREAD is not None:
        _THREAD.join(timeout=2)
    _MAIN_LOOP = None
    _THREAD = None
