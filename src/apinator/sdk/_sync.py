"""Sync bridge for the async client.

``_run_sync()`` lets plain synchronous code (Django views, Flask handlers,
scripts) call the async client methods:

  - No event loop in this thread: ``asyncio.run()``.
  - A loop is already running (Jupyter, sync code called from async code):
    the coroutine is handed to a private loop on a daemon thread.

Neither path can reuse resources bound to another loop, so callers pass
the loop their pooled connections live on and the bridge refuses to run.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Coroutine, Optional, TypeVar

T = TypeVar("T")

_worker_loop: asyncio.AbstractEventLoop | None = None
_worker_lock = threading.Lock()


def _background_loop() -> asyncio.AbstractEventLoop:
    """Return the daemon-thread loop, starting it on first use."""
    global _worker_loop
    with _worker_lock:
        if _worker_loop is None or _worker_loop.is_closed():
            loop = asyncio.new_event_loop()
            threading.Thread(
                target=loop.run_forever, name="apinator-sync", daemon=True
            ).start()
            _worker_loop = loop
    return _worker_loop


def _run_sync(
    coro: Coroutine[object, object, T],
    *,
    bound_loop: Optional[asyncio.AbstractEventLoop] = None,
) -> T:
    """Run *coro* to completion from synchronous code and return its result.

    Raises:
        RuntimeError: *bound_loop* is set.  The coroutine would run on a
            different loop than the one its pooled connections belong to
            (or block that loop while waiting on itself).
    """
    if bound_loop is not None:
        coro.close()
        raise RuntimeError(
            "Sync methods cannot be used while connected; "
            "use the async methods or 'await client.close()' first"
        )
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    return asyncio.run_coroutine_threadsafe(coro, _background_loop()).result()
