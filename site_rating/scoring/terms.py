"""Per-signal score terms.

Each function maps one signal of :class:`SiteMetadata` to the
integer it adds to the score.  Terms are independent and
additive; missing optional signals contribute zero.
"""

from __future__ import annotations

import math

from site_rating.models import site

BASE_SCORE = 1

_TOS_POINTS: dict[site.TosClassification, int] = {
    site.TosClassification.A: -1,
    site.TosClassification.B: 0,
    site.TosClassification.C: 0,
    site.TosClassification.D: 1,
    site.TosClassification.E: 2,
}


def _ceil_tenths(value: float) -> int:
    # True division then ceiling, not integer ceil-division.
    return int(math.ceil(value / 10.0))


def https(metadata: site.SiteMetadata) -> int:
    """Encrypted connections lower the score by one."""
    return -1 if metadata.uses_https else 0


def major_tracking_network(metadata: site.SiteMetadata) -> int:
    """One point per started tenth of pages the owning network reaches."""
    network = metadata.major_tracking_network
    if network is None:
        return 0
    return _ceil_tenths(network.percentage_of_pages)


def tracker_count(metadata: site.SiteMetadata) -> int:
    """One point per started block of ten trackers."""
    return _ceil_tenths(metadata.total_trackers_detected)


def contains_major_tracker(metadata: site.SiteMetadata) -> int:
    return 1 if metadata.contains_major_tracker else 0


def ip_tracker(metadata: site.SiteMetadata) -> int:
    return 1 if metadata.contains_ip_tracker else 0


def terms_of_service(metadata: site.SiteMetadata) -> int:
    """Map the ToS classification to points; unknown ToS is neutral."""
    classification = metadata.tos_classification
    if classification is None:
        return 0
    return _TOS_POINTS[classification]


def score_terms(metadata: site.SiteMetadata) -> tuple[site.ScoreTerm, ...]:
    """Evaluate every term, pairing each with the signal it read.

    Args:
        metadata: The site's measured signals.

    Returns:
        One :class:`ScoreTerm` per signal, in logging order.
    """
    network = metadata.major_tracking_network
    classification = metadata.tos_classification
    return (
        site.ScoreTerm(name="https", signal=metadata.uses_https, points=https(metadata)),
        site.ScoreTerm(
            name="isMajorTracker",
            signal=network.percentage_of_pages if network is not None else None,
            points=major_tracking_network(metadata),
        ),
        site.ScoreTerm(
            name="trackersDetected",
            signal=metadata.total_trackers_detected,
            points=tracker_count(metadata),
        ),
        site.ScoreTerm(
            name="containsMajorTracker",
            signal=metadata.contains_major_tracker,
            points=contains_major_tracker(metadata),
        ),
        site.ScoreTerm(name="ipTracker", signal=metadata.contains_ip_tracker, points=ip_tracker(metadata)),
        site.ScoreTerm(
            name="tos",
            signal=classification.value if classification is not None else None,
            points=terms_of_service(metadata),
        ),
    )
