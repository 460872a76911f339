from fastapi import Depends
from sqlalchemy.orm import Session
from config.database import get_db
from api.agents.agents_service import AgentsService
from api.rewards.rewards_schema import AgentEarnings, AgentPerformance

service = AgentsService

def read_performance(
    agent_id: str,
    db: Session = Depends(get_db)
) -> AgentPerformance:
    return service(db).get_performance(agent_id)

def read_earnings(
    agent_id: str,
    db: Session = Depends(get_db)
) -> AgentEarnings:
    return service(db).get_earnings(agent_id)
