"""
Fallback combinators.

One place owns the "try the primary strategy, degrade to the secondary"
logic, for single items (sync) and whole batches (async). Degrade events are
logged with ``degraded=True`` so they reach the degraded-classification log.
"""
import inspect
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar

from loguru import logger


T = TypeVar("T")

ErrorTypes = Tuple[Type[BaseException], ...]


def with_fallback(
    primary: Callable[..., T],
    secondary: Callable[..., T],
    *args: Any,
    recoverable: ErrorTypes = (Exception,),
    label: str = "classification",
) -> T:
    """Call ``primary(*args)``; on a recoverable error return ``secondary(*args)``."""
    try:
        return primary(*args)
    except recoverable as e:
        logger.bind(degraded=True).warning(
            f"{label} failed ({type(e).__name__}: {e}), falling back to {_name(secondary)}"
        )
        return secondary(*args)


async def with_fallback_async(
    primary: Callable[..., Awaitable[T]],
    secondary: Callable[..., Any],
    *args: Any,
    recoverable: ErrorTypes = (Exception,),
    label: str = "classification",
    on_fallback: Optional[Callable[[BaseException], None]] = None,
) -> T:
    """
    Await ``primary(*args)``; on a recoverable error run ``secondary(*args)``.

    ``secondary`` may be sync or async. ``on_fallback`` receives the error
    before the secondary runs.
    """
    try:
        return await primary(*args)
    except recoverable as e:
        logger.bind(degraded=True).error(
            f"{label} failed ({type(e).__name__}: {e}), falling back to {_name(secondary)}"
        )
        if on_fallback is not None:
            on_fallback(e)
        result = secondary(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


def _name(func: Callable) -> str:
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", repr(func))
