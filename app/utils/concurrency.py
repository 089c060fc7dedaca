"""
Concurrency utilities.

Provides a `synchronized` decorator that serialises method calls on an
instance's `_lock`. Services that are touched by both request threads and
the environment sampler thread use it around their read-modify-write
methods.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

F = TypeVar("F", bound=Callable)


def synchronized(func: F) -> F:
    """Run the method while holding `self._lock`.

    The lock must be re-entrant when a synchronized method calls another
    one on the same instance. Instances without a `_lock` run unlocked.
    """

    @wraps(func)
    def _wrapped(self, *args, **kwargs):
        lock = getattr(self, "_lock", None)
        if lock is None:
            return func(self, *args, **kwargs)
        with lock:
            return func(self, *args, **kwargs)

    return _wrapped  # type: ignore[return-value]
