"""Profile scoring and scoring configuration use cases."""

import logging
from typing import Any, Optional, Tuple

from ...domain.entities import AuditEntry, PersonalityProfile
from ...domain.exceptions import InvalidOverridesError
from ...domain.repositories import IAuditLogRepository, IScoringConfigRepository
from ...domain.scoring import (
    ScoringOverrides,
    ValidationResult,
    parse_overrides,
    resolve_overrides,
    validate_effective_overrides,
)
from ...domain.services import PersonalityProfileService

logger = logging.getLogger(__name__)


class ScoringConfigUseCase:
    """Load and activate scoring overrides."""

    def __init__(self, config_repository: IScoringConfigRepository, audit_repository: IAuditLogRepository):
        self.config_repository = config_repository
        self.audit_repository = audit_repository

    async def load(self) -> Optional[ScoringOverrides]:
        document = await self.config_repository.get_active()
        return parse_overrides(document) if document else None

    async def save(self, partial: Any, actor_id: Optional[str]) -> Tuple[int, ValidationResult]:
        """Merge ``partial`` over the active document, validate and store it.

        Raises ``InvalidOverridesError`` when validation reports errors; the
        active document is left untouched in that case.
        """
        current = await self.load()
        if current:
            merged = resolve_overrides(partial, base=current)
        else:
            merged = parse_overrides(partial) or ScoringOverrides()
        result = validate_effective_overrides(merged)
        if not result.is_valid:
            raise InvalidOverridesError(result)

        version = await self.config_repository.save(merged.to_document(), actor_id)
        try:
            await self.audit_repository.append(AuditEntry(
                action="scoring_config_update",
                actor_id=actor_id,
                details={"version": version, "warnings": result.warnings},
            ))
        except Exception as e:
            logger.error(f"Failed to write audit entry for scoring config v{version}: {e}")

        logger.info(f"Scoring overrides v{version} activated")
        return version, result


class BuildProfileUseCase:
    """Score raw responses with the active overrides plus any request overrides."""

    def __init__(self, profile_service: PersonalityProfileService, config_use_case: ScoringConfigUseCase):
        self.profile_service = profile_service
        self.config_use_case = config_use_case

    async def execute(self, responses: Any, overrides: Any = None) -> PersonalityProfile:
        active = await self.config_use_case.load()
        effective = resolve_overrides(active)
        if overrides:
            effective = resolve_overrides(overrides, base=effective)
        return self.profile_service.build_profile(responses, effective)
