"""Site scoring package.

Splits scoring into the per-signal terms, the monotonic score
cache, and the calculator that ties them together.  The public
API is :func:`compute_score` and :func:`compute_grade`.
"""

from __future__ import annotations

from site_rating.scoring.cache import ScoreCache
from site_rating.scoring.calculator import compute_grade, compute_score, explain, raw_score
from site_rating.scoring.grade import grade_from_score

__all__ = [
    "ScoreCache",
    "compute_grade",
    "compute_score",
    "explain",
    "grade_from_score",
    "raw_score",
]
