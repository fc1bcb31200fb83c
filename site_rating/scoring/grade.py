"""Default score → grade mapping."""

from __future__ import annotations

from site_rating.models import site


def grade_from_score(score: int) -> site.SiteGrade:
    """Bucket a score into a letter grade.

    Zero or below is an A, 1 a B, 2 a C, and anything
    higher a D.
    """
    if score <= 0:
        return site.SiteGrade.A
    if score == 1:
        return site.SiteGrade.B
    if score == 2:
        return site.SiteGrade.C
    return site.SiteGrade.D
