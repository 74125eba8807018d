"""Integral assessment DTOs."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.entities import IntegralDetail


@dataclass
class ConsistencyCheck:
    preliminary_matches_socratic: bool = True


@dataclass
class IntegralMetadata:
    """How the final integral result was reached."""

    preliminary_top: Optional[str] = None
    final_top: Optional[str] = None
    consistency_check: ConsistencyCheck = field(default_factory=ConsistencyCheck)
    fallback_used: bool = False
    error_fallback: bool = False
    socratic_analysis: Optional[str] = None
    adjustments: Dict[str, float] = field(default_factory=dict)
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preliminaryTop": self.preliminary_top,
            "finalTop": self.final_top,
            "consistencyCheck": {
                "preliminaryMatchesSocratic": self.consistency_check.preliminary_matches_socratic,
            },
            "fallbackUsed": self.fallback_used,
            "errorFallback": self.error_fallback,
            "socraticAnalysis": self.socratic_analysis,
            "adjustments": self.adjustments,
            "issues": self.issues,
        }


@dataclass
class IntegralPreliminaryDTO:
    level_scores: Dict[str, float]
    answered: int
    detail: IntegralDetail
    issues: List[str] = field(default_factory=list)


@dataclass
class IntegralResultDTO:
    detail: IntegralDetail
    metadata: IntegralMetadata
    status: str
