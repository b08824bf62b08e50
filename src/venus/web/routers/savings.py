"""Savings goal endpoints."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from venus.core.modules.savings.models import GoalView
from venus.web.deps import AppDep, AuthTokenDep
from venus.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["savings"])


class CreateGoalRequest(BaseModel):
    """Request to create a savings goal. Fields are validated by the ledger."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    label: str | None = Field(None, description="Goal name")
    amount: Any = Field(None, description="Positive amount, as a number or numeric string")
    lock_until: str | None = Field(None, description="Unlock date, YYYY-MM-DD")
    emergency_allowed: bool | None = Field(None, description="Allow withdrawal before the unlock date")


class GoalListResponse(BaseModel):
    goals: list[GoalView]


class GoalResponse(BaseModel):
    message: str = Field(..., description="Human-readable outcome")
    goal: GoalView


@router.get(
    "/savings",
    summary="List savings goals",
    description="Get the current user's savings goals, most recent first.",
    operation_id="listGoals",
    responses={
        200: {"description": "List of goals"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_goals(app: AppDep, auth_token: AuthTokenDep) -> GoalListResponse:
    return GoalListResponse(goals=await app.list_goals(auth_token))


@router.post(
    "/savings",
    summary="Create savings goal",
    description="Create a locked savings goal for the current user.",
    operation_id="createGoal",
    status_code=201,
    responses={
        201: {"description": "Goal created"},
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_goal(request: CreateGoalRequest, app: AppDep, auth_token: AuthTokenDep) -> GoalResponse:
    goal = await app.create_goal(
        auth_token, request.label, request.amount, request.lock_until, bool(request.emergency_allowed)
    )
    return GoalResponse(message="savings goal created.", goal=goal)


@router.get(
    "/savings/{goal_id}",
    summary="Get savings goal",
    description="Get a single savings goal owned by the current user.",
    operation_id="getGoal",
    responses={
        200: {"description": "Goal"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Goal not found"},
    },
)
async def get_goal(goal_id: str, app: AppDep, auth_token: AuthTokenDep) -> GoalView:
    return await app.get_goal(auth_token, goal_id)


@router.post(
    "/savings/{goal_id}/emergency-withdraw",
    summary="Withdraw savings goal",
    description=(
        "Release a goal. Allowed once the lock date has passed, or earlier if the goal "
        "was created with emergency withdrawal enabled."
    ),
    operation_id="withdrawGoal",
    responses={
        200: {"description": "Goal withdrawn"},
        400: {"model": ErrorResponse, "description": "Goal already withdrawn"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Goal is still locked and emergency withdrawal is not allowed"},
        404: {"model": ErrorResponse, "description": "Goal not found"},
    },
)
async def withdraw_goal(goal_id: str, app: AppDep, auth_token: AuthTokenDep) -> GoalResponse:
    result = await app.withdraw_goal(auth_token, goal_id)
    return GoalResponse(message=result.message, goal=GoalView.from_domain(result.goal))
