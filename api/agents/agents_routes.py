from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from config.database import get_db
from api.agents.agents_controller import read_performance, read_earnings
from api.rewards.rewards_schema import AgentEarnings, AgentPerformance

router = APIRouter(prefix="/agents", tags=["Agents"])

@router.get(
    "/{agent_id}/performance",
    response_model=AgentPerformance,
    summary="Completion rate, monthly counts and level"
)
def get_performance(
    agent_id: str,
    db: Session = Depends(get_db)
):
    return read_performance(agent_id, db)

@router.get(
    "/{agent_id}/earnings",
    response_model=AgentEarnings,
    summary="Points earned today, this week, this month and overall"
)
def get_earnings(
    agent_id: str,
    db: Session = Depends(get_db)
):
    return read_earnings(agent_id, db)
