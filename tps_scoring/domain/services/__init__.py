"""Domain services."""

from .profile_service import PersonalityProfileService

__all__ = ["PersonalityProfileService"]
