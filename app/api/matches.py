from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Depends

from app.core import matches as matches_core
from app.core.config import settings
from app.core.scores import parse_score
from app.schemas.matches import (
    CreateMatchRequest,
    MatchDetailResponse,
    MatchResponse,
    MatchSettlementResponse,
    PreviewRequest,
    PreviewResponse,
)
from app.core.dependencies import get_database_service
from app.models import Sport
from app.services.database import DatabaseService

router = APIRouter(prefix="/matches", tags=["matches"])


def _raise_for_failure(outcome: dict) -> None:
    """Turn a failed service result into the matching HTTP error."""
    if outcome["success"]:
        return
    status_code = 400 if outcome.get("error_type") == "validation" else 500
    raise HTTPException(status_code=status_code, detail=outcome["error"])


@router.post("/", response_model=MatchSettlementResponse)
async def create_match(
    match_data: CreateMatchRequest,
    database: DatabaseService = Depends(get_database_service)
):
    """Record a match and update the Elo ratings of everyone who played."""
    result = match_data.result
    score = match_data.score
    if result is None:
        parsed = parse_score(match_data.score_a, match_data.score_b)
        if parsed.result is None:
            raise HTTPException(
                status_code=400,
                detail="Could not determine the winner from the scores, please select it manually"
            )
        result = parsed.result
        if score is None:
            score = {"team_a": parsed.score_a, "team_b": parsed.score_b}

    outcome = await matches_core.create_match(
        sport=match_data.sport,
        team_a_player_ids=match_data.team_a_players,
        team_b_player_ids=match_data.team_b_players,
        result=result,
        court_id=match_data.court_id,
        score=score,
        database=database
    )
    _raise_for_failure(outcome)
    return outcome


@router.post("/preview", response_model=PreviewResponse)
async def preview_match(
    preview_data: PreviewRequest,
    database: DatabaseService = Depends(get_database_service)
):
    """Show the Elo changes a result would cause, without recording anything."""
    outcome = await matches_core.preview_elo_changes(
        team_a_player_ids=preview_data.team_a_players,
        team_b_player_ids=preview_data.team_b_players,
        sport=preview_data.sport,
        result=preview_data.result,
        database=database
    )
    _raise_for_failure(outcome)
    return outcome


@router.get("/", response_model=List[MatchResponse])
async def get_recent_matches(
    sport: Optional[Sport] = None,
    limit: int = Query(settings.RECENT_MATCHES_LIMIT, ge=1, le=100),
    database: DatabaseService = Depends(get_database_service)
):
    """Get the most recent matches."""
    try:
        return await matches_core.get_recent_matches(sport, limit, database=database)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("/{match_id}", response_model=MatchDetailResponse)
async def get_match(
    match_id: UUID,
    database: DatabaseService = Depends(get_database_service)
):
    """Get a match with the rating change of each participant."""
    try:
        match = await matches_core.get_match(match_id, database=database)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get match: {str(e)}") from e

    if match is None:
        raise HTTPException(status_code=404, detail=f"Match {match_id} not found")
    return match
