"""Product-management agents.

These are deterministic stand-ins: each returns a templated artifact and a
one-step trace so the workbench UI can render the full flow without a
model behind it.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentTraceStep(BaseModel):
    timestamp: datetime
    agent: str
    action: str
    input: dict[str, Any] = Field(default_factory=dict)
    output: str = ""


class AgentResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)
    trace: list[AgentTraceStep] = Field(default_factory=list)


class StrategyInput(BaseModel):
    market: str = ""
    segment: str = ""
    goals: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)


class ResearchInput(BaseModel):
    feedback: str = ""
    competitors: list[str] = Field(default_factory=list)
    trends: list[str] = Field(default_factory=list)


class PlanningInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requirements: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    sprint_length: int | None = Field(default=None, ge=1, alias="sprintLength")


def _trace(agent: str, action: str, inputs: dict[str, Any], output: str) -> list[AgentTraceStep]:
    return [
        AgentTraceStep(
            timestamp=datetime.now(UTC),
            agent=agent,
            action=action,
            input=inputs,
            output=output,
        )
    ]


def run_strategy(request: StrategyInput) -> AgentResponse:
    return AgentResponse(
        data={
            "northStar": f"Become the leading {request.market} solution for {request.segment}",
            "icps": [
                {"segment": request.segment, "painPoints": ["Manual processes", "Data silos"]},
            ],
            "successMetrics": [
                "User retention > 90%",
                "Time to value < 7 days",
                "NPS > 50",
            ],
            "constraints": request.constraints,
            "prd": "# Product Brief\n\n## Vision\n\n...\n\n## Success Metrics\n\n...",
        },
        trace=_trace(
            "strategy",
            "generate_brief",
            {"market": request.market, "segment": request.segment, "goals": request.goals},
            "Generated product brief",
        ),
    )


def run_research(request: ResearchInput) -> AgentResponse:
    return AgentResponse(
        data={
            "themes": [
                {"name": "Automation requests", "count": 45, "priority": "high"},
                {"name": "Integration needs", "count": 32, "priority": "medium"},
                {"name": "Performance improvements", "count": 28, "priority": "medium"},
            ],
            "insights": [
                "Users want to automate repetitive tasks",
                "Integration with existing tools is critical",
                "Performance is a key differentiator",
            ],
            "opportunities": [
                "Build no-code automation builder",
                "Add Zapier integration",
                "Optimize database queries",
            ],
        },
        trace=_trace("research", "cluster_feedback", {"feedback": request.feedback}, "Clustered themes"),
    )


def _priority(index: int) -> str:
    if index == 0:
        return "high"
    if index == 1:
        return "medium"
    return "low"


def run_planning(request: PlanningInput, default_sprint_length: int = 2) -> AgentResponse:
    """One story and one test case per requirement; first three go in the sprint."""
    stories = [
        {
            "id": f"US-{i + 1}",
            "title": requirement,
            "description": f"As a user, I want to {requirement.lower()}",
            "acceptanceCriteria": [
                "Given valid input",
                "When action is triggered",
                "Then expected outcome occurs",
            ],
            "priority": _priority(i),
            "effort": "medium",
        }
        for i, requirement in enumerate(request.requirements)
    ]
    test_cases = [
        {
            "id": f"TC-{i + 1}",
            "scenario": f"Test {requirement.lower()}",
            "steps": ["Step 1", "Step 2", "Step 3"],
            "expected": "Expected result",
        }
        for i, requirement in enumerate(request.requirements)
    ]
    return AgentResponse(
        data={
            "stories": stories,
            "sprint": {
                "length": request.sprint_length or default_sprint_length,
                "capacity": 40,
                "planned": request.requirements[:3],
            },
            "testCases": test_cases,
        },
        trace=_trace(
            "planning",
            "generate_backlog",
            {"requirements": request.requirements},
            "Generated stories and sprint plan",
        ),
    )


def run_gtm() -> AgentResponse:
    return AgentResponse(data={"message": "GTM agent coming soon"})


def acknowledge_automation(target: str) -> AgentResponse:
    messages = {
        "calendar": "Calendar events created (mocked)",
        "notion": "Synced to Notion (mocked)",
    }
    if target not in messages:
        raise ValueError(f"Unknown automation target: {target}")
    return AgentResponse(data={"message": messages[target]})
