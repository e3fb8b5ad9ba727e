"""Product-management agent endpoints (mocked agents)."""

from fastapi import APIRouter

from src.domains.pm.agents import (
    PlanningInput,
    ResearchInput,
    StrategyInput,
    acknowledge_automation,
    run_gtm,
    run_planning,
    run_research,
    run_strategy,
)

router = APIRouter(prefix="/api/pm", tags=["pm"])


def _dump(response) -> dict:
    return response.model_dump(mode="json")


@router.post("/strategy")
async def strategy(request: StrategyInput) -> dict:
    return _dump(run_strategy(request))


@router.post("/research")
async def research(request: ResearchInput) -> dict:
    return _dump(run_research(request))


@router.post("/planning")
async def planning(request: PlanningInput) -> dict:
    return _dump(run_planning(request))


@router.post("/gtm")
async def gtm() -> dict:
    return _dump(run_gtm())


@router.post("/automation/calendar")
async def automation_calendar() -> dict:
    return _dump(acknowledge_automation("calendar"))


@router.post("/automation/notion")
async def automation_notion() -> dict:
    return _dump(acknowledge_automation("notion"))
