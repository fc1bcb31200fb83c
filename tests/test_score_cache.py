"""Tests for the monotonic per-domain score cache.

Covers accept/reject semantics of ``add``, the read-back of
``submit``, reset, and behaviour under thread contention.
"""

from __future__ import annotations

import random
import threading
from concurrent import futures

import pytest

from site_rating.scoring import ScoreCache

# ── add / get ───────────────────────────────────────────────────


class TestAdd:
    """Tests for ScoreCache.add()."""

    def test_first_add_is_accepted(self, cache: ScoreCache) -> None:
        assert cache.add("d1", 5) is True
        assert cache.get("d1") == 5

    def test_higher_score_replaces(self, cache: ScoreCache) -> None:
        cache.add("d1", 5)
        assert cache.add("d1", 12) is True
        assert cache.get("d1") == 12

    def test_lower_score_rejected(self, cache: ScoreCache) -> None:
        cache.add("d1", 12)
        assert cache.add("d1", 5) is False
        assert cache.get("d1") == 12

    def test_equal_score_accepted(self, cache: ScoreCache) -> None:
        assert cache.add("d1", 7) is True
        assert cache.add("d1", 7) is True
        assert cache.get("d1") == 7

    def test_negative_scores(self, cache: ScoreCache) -> None:
        cache.add("d1", -1)
        assert cache.add("d1", -2) is False
        assert cache.get("d1") == -1

    def test_rejected_add_leaves_value_present(self, cache: ScoreCache) -> None:
        cache.add("d1", 3)
        if not cache.add("d1", 1):
            assert cache.get("d1") is not None

    def test_domains_are_independent(self, cache: ScoreCache) -> None:
        cache.add("a.com", 10)
        assert cache.add("b.com", 1) is True
        assert cache.get("a.com") == 10
        assert cache.get("b.com") == 1

    def test_domains_not_normalized(self, cache: ScoreCache) -> None:
        cache.add("Example.com", 4)
        assert cache.get("example.com") is None
        assert cache.get("www.Example.com") is None
        assert cache.get("Example.com") == 4


class TestGet:
    """Tests for ScoreCache.get()."""

    def test_unknown_domain(self, cache: ScoreCache) -> None:
        assert cache.get("never-seen.com") is None

    def test_contains_and_len(self, cache: ScoreCache) -> None:
        assert len(cache) == 0
        cache.add("a.com", 1)
        cache.add("b.com", 2)
        cache.add("a.com", 3)
        assert len(cache) == 2
        assert "a.com" in cache
        assert "c.com" not in cache


class TestMonotonicLaw:
    """The cached value is the max of everything submitted."""

    @pytest.mark.parametrize(
        "scores",
        [
            [1],
            [3, 1, 2],
            [0, 0, 0],
            [-5, -1, -3],
            [12, 5, 12, 4],
            [1, 2, 3, 4, 5],
        ],
    )
    def test_get_returns_max(self, cache: ScoreCache, scores: list[int]) -> None:
        for s in scores:
            cache.add("d", s)
        assert cache.get("d") == max(scores)

    def test_accept_iff_not_lower(self, cache: ScoreCache) -> None:
        rng = random.Random(1234)
        best: int | None = None
        for _ in range(200):
            s = rng.randint(-5, 20)
            accepted = cache.add("d", s)
            assert accepted is (best is None or s >= best)
            best = s if best is None else max(best, s)
            assert cache.get("d") == best


# ── submit ──────────────────────────────────────────────────────


class TestSubmit:
    """Tests for ScoreCache.submit()."""

    def test_returns_submitted_when_new(self, cache: ScoreCache) -> None:
        assert cache.submit("d1", 4) == 4

    def test_returns_cached_when_higher(self, cache: ScoreCache) -> None:
        cache.submit("d1", 12)
        assert cache.submit("d1", 5) == 12

    def test_returns_new_when_higher(self, cache: ScoreCache) -> None:
        cache.submit("d1", 5)
        assert cache.submit("d1", 12) == 12
        assert cache.get("d1") == 12

    def test_matches_add_flag(self, cache: ScoreCache) -> None:
        other = ScoreCache()
        for s in [3, 1, 3, 8, 2, 8]:
            assert (cache.submit("d", s) == s) is other.add("d", s)


# ── reset ───────────────────────────────────────────────────────


class TestReset:
    """Tests for ScoreCache.reset()."""

    def test_clears_all_domains(self, cache: ScoreCache) -> None:
        cache.add("d1", 5)
        cache.add("d1", 12)
        cache.add("d2", 1)
        cache.reset()
        assert cache.get("d1") is None
        assert cache.get("d2") is None
        assert len(cache) == 0

    def test_lower_score_accepted_after_reset(self, cache: ScoreCache) -> None:
        cache.add("d1", 12)
        cache.reset()
        assert cache.add("d1", 5) is True
        assert cache.get("d1") == 5

    def test_instances_do_not_share_state(self) -> None:
        a = ScoreCache()
        b = ScoreCache()
        a.add("d1", 9)
        assert b.get("d1") is None


# ── Concurrency ─────────────────────────────────────────────────


class TestConcurrency:
    """Cache invariants under real thread contention."""

    def test_concurrent_adds_keep_max(self, cache: ScoreCache) -> None:
        rng = random.Random(42)
        scores = [rng.randint(-10, 1000) for _ in range(2000)]
        barrier = threading.Barrier(8)

        def worker(chunk: list[int]) -> None:
            barrier.wait()
            for s in chunk:
                cache.add("shared.com", s)

        chunks = [scores[i::8] for i in range(8)]
        with futures.ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(worker, chunks))

        assert cache.get("shared.com") == max(scores)

    def test_rejected_add_never_loses_value(self, cache: ScoreCache) -> None:
        failures: list[int] = []
        barrier = threading.Barrier(6)

        def worker(offset: int) -> None:
            barrier.wait()
            for s in range(offset, 600, 6):
                if not cache.add("shared.com", s) and cache.get("shared.com") is None:
                    failures.append(s)

        with futures.ThreadPoolExecutor(max_workers=6) as pool:
            list(pool.map(worker, range(6)))

        assert failures == []
        assert cache.get("shared.com") == 599

    def test_submit_never_returns_below_submitted_during_reset(self, cache: ScoreCache) -> None:
        stop = threading.Event()
        bad: list[tuple[int, int]] = []

        def resetter() -> None:
            while not stop.is_set():
                cache.reset()

        def submitter() -> None:
            for s in range(2000):
                result = cache.submit("d", s % 17)
                if result < s % 17:
                    bad.append((s, result))

        t = threading.Thread(target=resetter)
        t.start()
        try:
            with futures.ThreadPoolExecutor(max_workers=4) as pool:
                list(pool.map(lambda _: submitter(), range(4)))
        finally:
            stop.set()
            t.join()

        assert bad == []
