from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core import matches as matches_core
from app.core.config import settings
from app.core.dependencies import get_database_service
from app.models import Sport
from app.schemas.players import LeaderboardEntryResponse
from app.services.database import DatabaseService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/", response_model=List[LeaderboardEntryResponse])
async def get_leaderboard(
    sport: Optional[Sport] = None,
    limit: int = Query(settings.LEADERBOARD_LIMIT, ge=1, le=200),
    database: DatabaseService = Depends(get_database_service),
):
    """Get players ranked by rating in one sport, or by their best sport."""
    return await matches_core.get_leaderboard(sport, limit, database=database)
