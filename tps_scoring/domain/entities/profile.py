"""Personality profile entity."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field

from .results import (
    AlignmentResult,
    AttachmentResult,
    CamelModel,
    EnneagramResult,
    HollandResult,
    IntegralDetail,
    MBTIResult,
    SocionicsResult,
)

PROFILE_VERSION = "2.0"


class EnneagramDetails(CamelModel):
    type: int
    wing: int
    tritype: str


class ProfileMappings(CamelModel):
    """Framework labels plus the detailed result of each classifier."""

    mbti: str
    enneagram: str
    enneagram_details: EnneagramDetails
    big_five: Dict[str, float]
    dnd_alignment: str
    socionics: str
    holland_code: str
    personality_matches: List[Dict[str, Any]] = Field(default_factory=list)

    mbti_detail: Optional[MBTIResult] = None
    enneagram_detail: Optional[EnneagramResult] = None
    holland_detail: Optional[HollandResult] = None
    alignment_detail: Optional[AlignmentResult] = None
    attachment_style: Optional[AttachmentResult] = None
    socionics_detail: Optional[SocionicsResult] = None
    integral_detail: Optional[IntegralDetail] = None


class PersonalityProfile(CamelModel):
    """Complete scored profile as stored on an assessment row."""

    dominant_traits: Dict[str, str]
    trait_scores: Dict[str, float]
    domain_scores: Dict[str, float]
    mappings: ProfileMappings
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    version: str = PROFILE_VERSION
    calculation_trace: List[Dict[str, Any]] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "PersonalityProfile":
        return cls.model_validate(document)

    def with_integral_detail(self, detail: IntegralDetail) -> "PersonalityProfile":
        """Return a copy carrying ``detail``; the mappings block is rebuilt, never patched."""
        mappings = self.mappings.model_copy(update={"integral_detail": detail})
        return self.model_copy(update={"mappings": mappings})
