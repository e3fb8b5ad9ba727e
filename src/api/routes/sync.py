"""Relays from the workbench to external automation webhooks."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from src.api.dependencies import get_automation_relay, get_strategy_relay
from src.integrations.webhooks import WebhookRelay

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.post("/automation")
async def sync_automation(
    payload: dict[str, Any] = Body(...),
    relay: WebhookRelay = Depends(get_automation_relay),
) -> dict:
    """Forward the automation tab's payload as-is."""
    await relay.forward(payload, source="automation-tab")
    return {"success": True, "message": "Data sent to your automation workflow"}


@router.post("/calendar")
async def sync_calendar(
    payload: dict[str, Any] = Body(...),
    relay: WebhookRelay = Depends(get_strategy_relay),
) -> dict:
    """Forward the strategy agent's output for calendar scheduling."""
    await relay.forward({"strategyData": payload.get("strategyData")}, source="strategy-agent")
    return {"success": True, "message": "Strategy sent to your workflow"}
