# -----------------------------------------------------------
# Matryoshka Embedding Service
# Exclusive, scoped access to a shared inference session.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

import threading
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

import structlog

from embedder.errors import EmbedError, ErrorKind

logger = structlog.get_logger()

T = TypeVar("T")


class SessionGuard(Generic[T]):
    """Grants one holder at a time access to a shared resource.

    An unexpected exception escaping while the guard is held marks it
    poisoned. The next holder always recovers: it logs a warning tagged with
    the ``poisoned_resource`` kind, clears the flag and proceeds. Expected
    pipeline errors (``EmbedError``) do not poison the guard.

    Args:
        resource: The object to protect.
    """

    def __init__(self, resource: T) -> None:
        self._resource = resource
        self._lock = threading.Lock()
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def acquire(self) -> Iterator[T]:
        """Hold the lock for the duration of the ``with`` block.

        Yields:
            T: The protected resource.
        """
        with self._lock:
            if self._poisoned:
                logger.warning(
                    "session_guard_poisoned_recovering",
                    kind=ErrorKind.POISONED_RESOURCE.value,
                )
                self._poisoned = False
            try:
                yield self._resource
            except EmbedError:
                raise
            except BaseException:
                self._poisoned = True
                raise
