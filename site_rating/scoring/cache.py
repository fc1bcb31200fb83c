"""Best-known score per domain.

A :class:`ScoreCache` remembers the highest score ever submitted
for each domain so that re-scoring a site within a session never
reports a lower, possibly stale, value than was already shown.

The host constructs one cache per process (or session) and hands
it to every scoring call.  All operations serialize on a single
lock, so concurrent submissions for the same domain can never both
act on the same stale value.

Domains are used as given.  No case folding or ``www.`` stripping
is applied.
"""

from __future__ import annotations

import threading

from site_rating.utils import logger

log = logger.create_logger("ScoreCache")


class ScoreCache:
    """Thread-safe domain → highest score mapping."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._scores: dict[str, int] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._scores)

    def __contains__(self, domain: object) -> bool:
        with self._lock:
            return domain in self._scores

    def _compare_and_set(self, domain: str, score: int) -> tuple[bool, int]:
        """Store *score* unless a strictly higher one is cached.

        Must be called with the lock held.

        Returns:
            ``(accepted, cached)`` where *cached* is the value held
            for *domain* after the call.
        """
        previous = self._scores.get(domain)
        if previous is not None and previous > score:
            return False, previous
        self._scores[domain] = score
        return True, score

    def add(self, domain: str, score: int) -> bool:
        """Add a score, replacing a cached one only if not lower.

        An equal score counts as accepted.

        Returns:
            True if *score* is now the cached value, False if a
            higher score was already cached and was kept.
        """
        with self._lock:
            accepted, _ = self._compare_and_set(domain, score)
        return accepted

    def submit(self, domain: str, score: int) -> int:
        """Add a score and return the value cached afterwards.

        Same comparison as :meth:`add`, but the stored value is
        read back under the same lock, so a concurrent
        :meth:`reset` can never leave the caller without a value.
        """
        with self._lock:
            accepted, cached = self._compare_and_set(domain, score)
        if not accepted:
            log.debug("Keeping higher cached score", {"domain": domain, "submitted": score, "cached": cached})
        return cached

    def get(self, domain: str) -> int | None:
        """Return the cached score for *domain*, or ``None``."""
        with self._lock:
            return self._scores.get(domain)

    def reset(self) -> None:
        """Forget every cached score."""
        with self._lock:
            self._scores = {}
