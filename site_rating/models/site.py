"""Pydantic models for site metadata, grades, and score breakdowns."""

from __future__ import annotations

import enum

import pydantic

from site_rating.utils.serialization import snake_to_camel

_MODEL_CONFIG = pydantic.ConfigDict(
    alias_generator=snake_to_camel,
    populate_by_name=True,
    frozen=True,
)


class TosClassification(enum.StrEnum):
    """Terms-of-service letter classification (A best, E worst)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class SiteGrade(enum.StrEnum):
    """Human-facing grade, ordered from best (A) to worst (D)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class MajorTrackingNetwork(pydantic.BaseModel):
    """A tracking network seen across a large share of page loads."""

    model_config = _MODEL_CONFIG

    name: str = ""
    percentage_of_pages: float = pydantic.Field(ge=0, le=100)


class TermsOfService(pydantic.BaseModel):
    """Terms-of-service summary for a site."""

    model_config = _MODEL_CONFIG

    classification: TosClassification


class SiteMetadata(pydantic.BaseModel):
    """Signals measured for one visited site.

    Optional signals are either fully valid structured values or
    ``None``; validation rejects anything in between at
    construction time.
    """

    model_config = _MODEL_CONFIG

    host: str
    uses_https: bool = False
    total_trackers_detected: int = pydantic.Field(default=0, ge=0)
    contains_major_tracker: bool = False
    major_tracking_network: MajorTrackingNetwork | None = None
    contains_ip_tracker: bool = False
    terms_of_service: TermsOfService | None = None

    @property
    def tos_classification(self) -> TosClassification | None:
        """The terms-of-service classification, if known."""
        if self.terms_of_service is None:
            return None
        return self.terms_of_service.classification


class ScoreTerm(pydantic.BaseModel):
    """One signal's contribution to the score."""

    model_config = _MODEL_CONFIG

    name: str
    signal: bool | int | float | str | None
    points: int


class ScoreBreakdown(pydantic.BaseModel):
    """How a site's score was put together."""

    model_config = _MODEL_CONFIG

    host: str
    base: int
    terms: tuple[ScoreTerm, ...] = ()
    raw_score: int
