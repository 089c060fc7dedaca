from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from app.config import AppConfig
from app.domain.environmental_alerts import EnvironmentalAlertEvaluator
from app.domain.user_context import UserContext
from app.services.ai.diagnosis_service import DiagnosisService
from app.services.ai.gemini_provider import GeminiDiagnosisProvider
from app.services.application.alert_service import AlertService
from app.services.application.analytics_service import AnalyticsService
from app.services.application.plant_guide_service import PlantGuideService
from app.services.application.profile_service import ProfileService
from app.services.application.recovery_tracker import RecoveryTracker
from app.services.hardware.environment_sampler import EnvironmentSamplerService
from app.services.protocols import DiagnosisProvider
from infrastructure.database.repositories.persistence_store import PersistenceStore
from infrastructure.database.sqlite_handler import SQLiteDatabaseHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserServices:
    """Services bound to one user's namespace."""

    user: UserContext
    store: PersistenceStore
    alert_service: AlertService
    tracker: RecoveryTracker
    profile_service: ProfileService
    analytics_service: AnalyticsService


@dataclass
class ServiceContainer:
    """Aggregate and manage core backend services."""

    config: AppConfig
    database: SQLiteDatabaseHandler
    store: PersistenceStore
    evaluator: EnvironmentalAlertEvaluator
    diagnosis_service: DiagnosisService
    plant_guide_service: PlantGuideService = field(default_factory=PlantGuideService)
    sampler: Optional[EnvironmentSamplerService] = None
    _user_services: Dict[Optional[str], UserServices] = field(default_factory=dict, repr=False)
    _user_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def build(
        cls,
        config: AppConfig,
        *,
        database: SQLiteDatabaseHandler | None = None,
        provider: DiagnosisProvider | None = None,
    ) -> "ServiceContainer":
        """Construct the service container with all dependencies.

        Args:
            config: Application configuration
            database: Pre-built handler (tests); defaults to ``config.database_path``
            provider: Diagnosis provider; defaults to the Gemini REST client
        """
        logger.info("Building ServiceContainer...")
        database = database or SQLiteDatabaseHandler(config.database_path)
        database.create_tables()

        store = PersistenceStore(database)
        evaluator = EnvironmentalAlertEvaluator(config.alert_thresholds())
        provider = provider or GeminiDiagnosisProvider(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            timeout=config.provider_timeout_seconds,
        )

        container = cls(
            config=config,
            database=database,
            store=store,
            evaluator=evaluator,
            diagnosis_service=DiagnosisService(provider),
        )
        # The sampler shares the alert service of its target user so writes stay serialised
        sampler_alerts = container.for_user(UserContext(config.sampler_user_id)).alert_service
        container.sampler = EnvironmentSamplerService(
            sampler_alerts,
            evaluator=EnvironmentalAlertEvaluator(config.alert_thresholds()),
            interval_s=config.sampler_interval_seconds,
        )
        logger.info("ServiceContainer built successfully.")
        return container

    def for_user(self, user: UserContext) -> UserServices:
        """Services for *user*, created once and reused for later requests."""
        with self._user_lock:
            services = self._user_services.get(user.user_id)
            if services is None:
                store = self.store.for_user(user)
                alert_service = AlertService(store)
                services = UserServices(
                    user=user,
                    store=store,
                    alert_service=alert_service,
                    tracker=RecoveryTracker(store, alert_service, self.evaluator),
                    profile_service=ProfileService(store),
                    analytics_service=AnalyticsService(store),
                )
                self._user_services[user.user_id] = services
                logger.debug("Created services for user %s", user.user_id or "<default>")
            return services

    def shutdown(self) -> None:
        """Release external resources before process exit."""
        if self.sampler is not None:
            self.sampler.stop()
        self.database.close_db()
        logger.info("ServiceContainer shutdown complete.")
