"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from site_rating import config
from site_rating.models import site
from site_rating.scoring import ScoreCache
from site_rating.utils import logger

# ── Metadata factories ──────────────────────────────────────────


@pytest.fixture()
def https_only_site() -> site.SiteMetadata:
    """An encrypted site with no tracking signals at all."""
    return site.SiteMetadata(
        host="example.com",
        uses_https=True,
        total_trackers_detected=0,
        contains_major_tracker=False,
        contains_ip_tracker=False,
    )


@pytest.fixture()
def heavy_tracking_site() -> site.SiteMetadata:
    """An unencrypted site with every tracking signal raised."""
    return site.SiteMetadata(
        host="tracked.example",
        uses_https=False,
        total_trackers_detected=23,
        contains_major_tracker=True,
        major_tracking_network=site.MajorTrackingNetwork(name="Google", percentage_of_pages=45),
        contains_ip_tracker=True,
        terms_of_service=site.TermsOfService(classification=site.TosClassification.D),
    )


# ── Cache & settings ────────────────────────────────────────────


@pytest.fixture()
def cache() -> ScoreCache:
    """A fresh, empty score cache."""
    return ScoreCache()


@pytest.fixture()
def quiet_settings() -> config.Settings:
    """Settings with the per-calculation log switched off."""
    return config.Settings(log_score_calculation=False)


@pytest.fixture()
def loud_settings() -> config.Settings:
    """Settings with the per-calculation log switched on."""
    return config.Settings(log_score_calculation=True)


@pytest.fixture(autouse=True)
def _clear_log_buffer() -> None:
    logger.clear_log_buffer()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
