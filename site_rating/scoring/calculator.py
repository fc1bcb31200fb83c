"""Site score calculator.

Sums the per-signal terms onto a base score of 1, then checks the
result against the :class:`ScoreCache` so that a domain's reported
score never drops below the highest value seen this session.
Grades are derived from the score by an injected mapping function.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from site_rating import config
from site_rating.models import site
from site_rating.scoring import grade, terms
from site_rating.scoring.cache import ScoreCache
from site_rating.utils import logger

log = logger.create_logger("SiteScore")

G = TypeVar("G")


def explain(metadata: site.SiteMetadata) -> site.ScoreBreakdown:
    """Break the raw score down into its terms.

    Pure: the cache is neither read nor updated.
    """
    score_terms = terms.score_terms(metadata)
    return site.ScoreBreakdown(
        host=metadata.host,
        base=terms.BASE_SCORE,
        terms=score_terms,
        raw_score=terms.BASE_SCORE + sum(t.points for t in score_terms),
    )


def raw_score(metadata: site.SiteMetadata) -> int:
    """Return the uncached score for *metadata*."""
    return (
        terms.BASE_SCORE
        + terms.https(metadata)
        + terms.major_tracking_network(metadata)
        + terms.tracker_count(metadata)
        + terms.contains_major_tracker(metadata)
        + terms.ip_tracker(metadata)
        + terms.terms_of_service(metadata)
    )


def compute_score(metadata: site.SiteMetadata, cache: ScoreCache) -> int:
    """Score a site, never reporting less than its cached best.

    The raw score is submitted to *cache* under ``metadata.host``.
    If a higher score is already cached for that host, the cached
    value is returned instead.

    Args:
        metadata: The site's measured signals.
        cache: The session's shared score cache.

    Returns:
        The raw score, or the higher cached score.
    """
    return cache.submit(metadata.host, raw_score(metadata))


def compute_grade(
    metadata: site.SiteMetadata,
    cache: ScoreCache,
    score_to_grade: Callable[[int], G] = grade.grade_from_score,  # type: ignore[assignment]
    *,
    settings: config.Settings | None = None,
) -> G:
    """Score a site and map the score to a grade.

    Args:
        metadata: The site's measured signals.
        cache: The session's shared score cache.
        score_to_grade: Pure mapping from score to grade.
        settings: Overrides the environment-derived settings.

    Returns:
        Whatever *score_to_grade* returns for the cached score.
    """
    score = compute_score(metadata, cache)
    if (settings or config.get_settings()).log_score_calculation:
        _log_calculation(explain(metadata), score)
    return score_to_grade(score)


def _log_calculation(breakdown: site.ScoreBreakdown, score: int) -> None:
    """Log every term with the signal it read and its points."""
    data: dict[str, object] = {"host": breakdown.host, "base": breakdown.base}
    for term in breakdown.terms:
        signal = "none" if term.signal is None else term.signal
        data[term.name] = f"{signal} ({term.points:+d})"
    data["raw"] = breakdown.raw_score
    data["score"] = score
    if score != breakdown.raw_score:
        log.info("Site score (cached)", data)
    else:
        log.info("Site score", data)
