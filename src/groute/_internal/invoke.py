"""Invoke helpers — call sync or async route callables uniformly.

Route callables can be ``def`` or ``async def``. Anything that calls a
user-provided callable goes through :func:`invoke` so the sync/async
check lives in exactly one place.

Usage::

    from groute._internal.invoke import invoke

    result = await invoke(handler, request)
    result = await invoke(handler, request, in_thread=True)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, in_thread: bool = False, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    With ``in_thread=True`` a plain ``def`` handler runs in an anyio
    worker thread instead of on the event loop. Coroutine functions are
    always awaited directly.
    """
    if in_thread and not _is_async_callable(handler):
        call = functools.partial(handler, *args, **kwargs)
        result = await anyio.to_thread.run_sync(call)
    else:
        result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def _is_async_callable(obj: Any) -> bool:
    while isinstance(obj, functools.partial):
        obj = obj.func
    if inspect.iscoroutinefunction(obj):
        return True
    call = getattr(obj, "__call__", None)  # noqa: B004
    return inspect.iscoroutinefunction(call)
