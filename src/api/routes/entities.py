"""Entity registry and audit trail endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_registry
from src.domains.registry.models import AuditEventCreate, EntityCreate, EntityUpdate
from src.domains.registry.service import RegistryService

router = APIRouter(prefix="/api", tags=["entities"])


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@router.get("/entities")
async def list_entities(registry: RegistryService = Depends(get_registry)) -> list[dict]:
    return [_dump(e) for e in await registry.list_entities()]


@router.get("/entities/{entity_id}")
async def get_entity(entity_id: str, registry: RegistryService = Depends(get_registry)) -> dict:
    return _dump(await registry.get_entity(entity_id))


@router.post("/entities")
async def create_entity(
    request: EntityCreate, registry: RegistryService = Depends(get_registry)
) -> dict:
    """Onboard an entity. Without ``riskLevel`` the classifier scores it."""
    return _dump(await registry.create_entity(request))


@router.put("/entities/{entity_id}")
async def update_entity(
    entity_id: str,
    request: EntityUpdate,
    registry: RegistryService = Depends(get_registry),
) -> dict:
    return _dump(await registry.update_entity(entity_id, request))


# ---------------------------------------------------------------------------
# Audit trail
# ---------------------------------------------------------------------------


@router.get("/audit")
async def list_audit_events(registry: RegistryService = Depends(get_registry)) -> list[dict]:
    """Audit events, newest first."""
    return [_dump(e) for e in await registry.list_audit_events()]


@router.post("/audit")
async def create_audit_event(
    request: AuditEventCreate, registry: RegistryService = Depends(get_registry)
) -> dict:
    return _dump(await registry.record_audit_event(request))
