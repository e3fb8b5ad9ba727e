"""Entity onboarding and audit trail operations."""

from datetime import UTC, datetime

import structlog

from src.domains.risk.classifier import RiskClassifier
from src.domains.risk.models import OnboardingSubject

from .models import AuditEvent, AuditEventCreate, Entity, EntityCreate, EntityUpdate
from .repository import IdGenerator, InMemoryRepository, Repository

logger = structlog.get_logger()


class RegistryService:
    """Creates and updates entities, records audit events.

    An entity created without a ``riskLevel`` is scored by the classifier
    when the request carries onboarding fields (country, PII, controls...).
    A name-only entity is stored unscored.
    """

    def __init__(
        self,
        classifier: RiskClassifier,
        entities: Repository[Entity] | None = None,
        audit_events: Repository[AuditEvent] | None = None,
    ) -> None:
        self._classifier = classifier
        self._entities = entities or InMemoryRepository[Entity]("entity")
        self._audit_events = audit_events or InMemoryRepository[AuditEvent]("audit event")
        self._entity_ids = IdGenerator("entity")
        self._audit_ids = IdGenerator("audit")

    async def list_entities(self) -> list[Entity]:
        return await self._entities.list()

    async def get_entity(self, entity_id: str) -> Entity:
        return await self._entities.get(entity_id)

    async def create_entity(self, request: EntityCreate) -> Entity:
        fields = request.model_dump()
        if request.risk_level is None:
            # unscored entities keep the stored default level and no score
            del fields["risk_level"]
            if request.has_onboarding_data:
                fields.update(await self._score(request))

        now = datetime.now(UTC)
        entity = Entity(id=self._entity_ids(), created_at=now, last_updated=now, **fields)
        await self._entities.insert(entity)
        logger.info(
            "entity_created",
            entity_id=entity.id,
            entity_type=entity.type.value,
            risk_level=entity.risk_level.value,
        )
        return entity

    async def _score(self, request: EntityCreate) -> dict:
        subject = OnboardingSubject(
            company_name=request.name,
            company_type=request.type,
            country=request.country,
            ein=request.ein,
            contact_email=request.contact_email,
            has_controls=request.has_controls,
            has_pii=request.has_pii,
            documents=request.documents,
        )
        assessment = await self._classifier.assess_risk(subject)
        if assessment.error:
            logger.warning(
                "entity_scored_by_fallback",
                company_name=request.name,
                error=assessment.error,
            )
        return {
            "risk_level": assessment.risk_level,
            "risk_score": assessment.score,
            "risk_reasons": assessment.reasons,
        }

    async def update_entity(self, entity_id: str, request: EntityUpdate) -> Entity:
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        changes["last_updated"] = datetime.now(UTC)
        entity = await self._entities.update(entity_id, changes)
        logger.info("entity_updated", entity_id=entity_id, fields=sorted(changes))
        return entity

    async def list_audit_events(self) -> list[AuditEvent]:
        # insertion order is chronological
        events = await self._audit_events.list()
        return list(reversed(events))

    async def record_audit_event(self, request: AuditEventCreate) -> AuditEvent:
        fields = request.model_dump()
        fields["entity_name"] = request.entity_name or request.entity_id or "Unknown"
        event = AuditEvent(id=self._audit_ids(), timestamp=datetime.now(UTC), **fields)
        await self._audit_events.insert(event)
        logger.info("audit_event_recorded", audit_id=event.id, action=event.action)
        return event
