"""Dependency injection container."""

import logging
from typing import Any, Dict, Optional

from ..application.use_cases import (
    ApplyRecalculationUseCase,
    AuthorizeAdminUseCase,
    BuildProfileUseCase,
    IntegralAssessmentUseCase,
    ListAssessmentsUseCase,
    ScoringConfigUseCase,
    TraitClarificationUseCase,
)
from ..domain.services import PersonalityProfileService
from ..infrastructure.database import DatabaseManager, initialize_database
from ..infrastructure.external_services import JWTIdentityProvider, LLMServiceImpl
from ..infrastructure.repositories import (
    SQLAssessmentRepository,
    SQLAuditLogRepository,
    SQLBulkOperationRepository,
    SQLRoleRepository,
    SQLScoringConfigRepository,
)
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._instances: Dict[str, Any] = {}
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize container and all dependencies."""
        if self._initialized:
            return

        try:
            db_manager = initialize_database(
                self.settings.database_url,
                echo=self.settings.debug
            )
            await db_manager.initialize()
            if self.settings.create_tables:
                await db_manager.create_tables()
            self._instances["db_manager"] = db_manager

            self._register_domain_services()
            self._register_infrastructure_services(db_manager)
            self._register_use_cases()

            self._initialized = True
            logger.info("Dependency injection container initialized")

        except Exception as e:
            logger.error(f"Failed to initialize container: {e}")
            raise

    def _register_domain_services(self) -> None:
        self._instances["profile_service"] = PersonalityProfileService()

    def _register_infrastructure_services(self, db_manager: DatabaseManager) -> None:
        self._instances["assessment_repository"] = SQLAssessmentRepository(db_manager)
        self._instances["bulk_operation_repository"] = SQLBulkOperationRepository(db_manager)
        self._instances["audit_repository"] = SQLAuditLogRepository(db_manager)
        self._instances["role_repository"] = SQLRoleRepository(db_manager)
        self._instances["scoring_config_repository"] = SQLScoringConfigRepository(db_manager)

        self._instances["identity_provider"] = JWTIdentityProvider(
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            audience=self.settings.jwt_audience,
        )
        self._instances["llm_service"] = LLMServiceImpl(
            provider=self.settings.llm_provider,
            anthropic_api_key=self.settings.anthropic_api_key,
            openai_api_key=self.settings.openai_api_key,
            model=self.settings.llm_model,
            max_tokens=self.settings.llm_max_tokens,
        )

    def _register_use_cases(self) -> None:
        i = self._instances
        i["authorize_admin"] = AuthorizeAdminUseCase(i["identity_provider"], i["role_repository"])
        i["list_assessments"] = ListAssessmentsUseCase(
            i["assessment_repository"],
            default_limit=self.settings.bulk_list_default_limit,
            max_limit=self.settings.bulk_list_max_limit,
        )
        i["apply_recalculation"] = ApplyRecalculationUseCase(
            i["assessment_repository"],
            i["bulk_operation_repository"],
            i["audit_repository"],
            chunk_size=self.settings.bulk_chunk_size,
        )
        i["scoring_config"] = ScoringConfigUseCase(i["scoring_config_repository"], i["audit_repository"])
        i["build_profile"] = BuildProfileUseCase(i["profile_service"], i["scoring_config"])
        i["integral_assessment"] = IntegralAssessmentUseCase(i["llm_service"])
        i["trait_clarification"] = TraitClarificationUseCase(i["llm_service"], i["profile_service"])

    def get(self, service_name: str) -> Any:
        """Get service instance."""
        if not self._initialized:
            raise RuntimeError("Container not initialized")

        instance = self._instances.get(service_name)
        if not instance:
            raise ValueError(f"Service '{service_name}' not found")

        return instance

    async def health_check(self) -> Dict[str, bool]:
        """Check health of all services."""
        health_status = {}

        db_manager: Optional[DatabaseManager] = self._instances.get("db_manager")
        health_status["database"] = await db_manager.health_check() if db_manager else False

        try:
            llm_health = await self.get("llm_service").health_check()
            health_status["llm"] = any(llm_health.values())
        except Exception as e:
            logger.error(f"LLM health check failed: {e}")
            health_status["llm"] = False

        return health_status

    async def close(self) -> None:
        """Close container and cleanup resources."""
        db_manager = self._instances.get("db_manager")
        if db_manager:
            await db_manager.close()
        self._initialized = False
        logger.info("Container closed successfully")


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the process-wide container instance."""
    global _container
    if not _container:
        _container = Container(get_settings())
    return _container
