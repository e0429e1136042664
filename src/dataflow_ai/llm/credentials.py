"""Round-robin pool of interchangeable API keys."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class CredentialPool:
    """Ordered, non-empty set of credentials with one active entry.

    Rotation is blind round-robin with wraparound. ``current`` and ``rotate``
    share a lock so concurrent rotations each advance the index exactly once.
    """

    def __init__(self, credentials: Sequence[str]) -> None:
        cleaned = tuple(item.strip() for item in credentials if item and item.strip())
        if not cleaned:
            raise ValueError("Credential pool requires at least one non-empty credential.")
        self._credentials = cleaned
        self._index = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._credentials)

    @property
    def index(self) -> int:
        with self._lock:
            return self._index

    def current(self) -> str:
        with self._lock:
            return self._credentials[self._index]

    def rotate(self) -> str:
        with self._lock:
            return self._advance()

    def rotate_from(self, credential: str) -> str:
        """Advance past ``credential`` only if it is still the active entry.

        Callers that hit quota on the same key concurrently all report it,
        but the pool moves on once; later reports find a different active
        credential and leave the index alone.
        """
        with self._lock:
            if self._credentials[self._index] != credential:
                return self._credentials[self._index]
            return self._advance()

    def _advance(self) -> str:
        self._index = (self._index + 1) % len(self._credentials)
        logger.debug(
            "Rotated credential pool to index %s/%s.",
            self._index,
            len(self._credentials),
        )
        return self._credentials[self._index]
