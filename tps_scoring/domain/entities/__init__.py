"""Domain entities."""

from .bulk_operation import AuditEntry, BulkOperation, BulkOperationStatus, ProfileUpdate, StoredAssessment
from .profile import PROFILE_VERSION, EnneagramDetails, PersonalityProfile, ProfileMappings
from .results import (
    AlignmentAxis,
    AlignmentResult,
    AttachmentResult,
    BigFiveResult,
    CognitiveFunction,
    EnneagramResult,
    FrameworkResult,
    HollandResult,
    InstinctualVariant,
    IntegralDetail,
    IntegralLevelInfo,
    MBTIDimension,
    MBTIResult,
    RealityTriadMapping,
    SocionicsResult,
)

__all__ = [
    "AuditEntry",
    "BulkOperation",
    "BulkOperationStatus",
    "ProfileUpdate",
    "StoredAssessment",
    "PROFILE_VERSION",
    "EnneagramDetails",
    "PersonalityProfile",
    "ProfileMappings",
    "AlignmentAxis",
    "AlignmentResult",
    "AttachmentResult",
    "BigFiveResult",
    "CognitiveFunction",
    "EnneagramResult",
    "FrameworkResult",
    "HollandResult",
    "InstinctualVariant",
    "IntegralDetail",
    "IntegralLevelInfo",
    "MBTIDimension",
    "MBTIResult",
    "RealityTriadMapping",
    "SocionicsResult",
]
