import logging
import threading
import time
from collections.abc import Callable
from typing import Any, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

class PageCache:
    """In-process cache of storefront page payloads keyed by site path.

    Pages are rendered on first request and served from memory until a
    mutation revalidates their path or they outlive max_age seconds.
    """

    def __init__(self, max_age: float = 300.0) -> None:
        self.max_age = max_age
        self._pages: dict[str, tuple[float, Any]] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def get_or_render(self, path: str, render: Callable[[], Optional[T]]) -> Optional[T]:
        """Returns the cached payload for path, rendering and caching it on a miss.

        A render that returns None (page not found) is not cached, and neither
        is one that overlapped a revalidation: it may hold data read before
        the mutation committed.
        """
        now = time.monotonic()
        with self._lock:
            cached = self._pages.get(path)
            if cached is not None and now - cached[0] < self.max_age:
                return cached[1]
            generation = self._generation

        payload = render()
        if payload is not None:
            with self._lock:
                if generation == self._generation:
                    self._pages[path] = (now, payload)
        return payload

    def revalidate_path(self, path: str, layout: bool = False) -> None:
        """Evicts the page at path; with layout=True, every page below it too."""
        prefix = path.rstrip("/") + "/"
        with self._lock:
            stale = [
                p for p in self._pages
                if p == path or (layout and p.startswith(prefix))
            ]
            for p in stale:
                del self._pages[p]
            self._generation += 1
        logger.debug(f"Revalidated {path}{' (layout)' if layout else ''}: {len(stale)} page(s) evicted.")

    def is_cached(self, path: str) -> bool:
        with self._lock:
            return path in self._pages
