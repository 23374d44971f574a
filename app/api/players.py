from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.core import matches as matches_core
from app.core.dependencies import get_database_service
from app.models import Sport
from app.schemas.players import PlayerStatsResponse
from app.services.database import DatabaseService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/{player_id}/stats", response_model=PlayerStatsResponse)
async def get_player_stats(
    player_id: UUID,
    sport: Optional[Sport] = None,
    database: DatabaseService = Depends(get_database_service),
):
    """Get a player's win/loss record and rating, overall or for one sport."""
    return await matches_core.get_player_match_stats(player_id, sport, database=database)


@router.get("/{player_id}/matches")
async def get_player_matches(
    player_id: UUID,
    sport: Optional[Sport] = None,
    database: DatabaseService = Depends(get_database_service),
):
    """Get every match a player took part in, newest first."""
    try:
        return await matches_core.get_player_match_history(player_id, sport, database=database)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
